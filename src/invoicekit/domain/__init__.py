"""Domain layer for invoicekit application.

Services live in their own modules (``invoice``, ``client``,
``dashboard``) and are imported from there so that the database layer can
depend on :mod:`invoicekit.domain.entities` without import cycles.
"""
