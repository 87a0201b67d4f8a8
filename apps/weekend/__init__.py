"""
Weekend App - Shared Weekend Planning

One shared weekend: participants join, wish for food and drinks, propose
and vote on activities, split the packing list, log expenses and build
the programme per day.

Key Features:
- Single JSON document per event, kept in a key-value store
- Participant login by email, cascade cleanup on leave
- Vote toggling on activities
- Expense settlement (who pays whom)

Architecture:
- Models: dataclasses for the document (no database tables)
- Store: DocumentStore on the Django cache framework (Redis or in-process)
- Services: one module per collection, plus settlement
- Views: thin DRF APIViews, one per collection
"""

__version__ = '1.0.0'
