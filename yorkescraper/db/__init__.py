from yorkescraper.db.application_database import ApplicationDatabase, ReconcileOutcome

__all__ = ["ApplicationDatabase", "ReconcileOutcome"]
