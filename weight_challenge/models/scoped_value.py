from weight_challenge.app import db
from datetime import datetime

class ScopedValue(db.Model):
    """Generic key/value storage grouped by scope (UI state, not domain data)"""
    __tablename__ = 'scoped_values'

    scope = db.Column(db.String(64), primary_key=True)
    key = db.Column(db.String(64), primary_key=True)
    value = db.Column(db.Text, nullable=False)  # JSON encoded
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
