"""Domain layer for ledgerit application.

Services are imported from their modules (``ledgerit.domain.ledger`` and
friends); this package stays import-light because the database layer pulls
in ``ledgerit.domain.entities``.
"""
