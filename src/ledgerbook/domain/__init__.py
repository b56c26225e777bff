"""Domain layer for ledgerbook application.

Services are imported from their modules (e.g. ``ledgerbook.domain.transfer``);
this package does not re-export them, because ``ledgerbook.database.base``
imports ``ledgerbook.domain.entities`` and eager service imports here would
be circular.
"""
