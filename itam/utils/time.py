from datetime import datetime, timezone


def utcnow():
    """Naive UTC timestamp, the form the database columns store"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
