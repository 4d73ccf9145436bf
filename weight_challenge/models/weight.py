from weight_challenge.app import db
from datetime import datetime

class WeightEntry(db.Model):
    __tablename__ = 'weight_entries'
    __table_args__ = (
        db.UniqueConstraint('participant_id', 'date', name='uq_weight_entries_participant_date'),
    )

    id = db.Column(db.Integer, primary_key=True)
    participant_id = db.Column(db.String(32), db.ForeignKey('participants.id'), nullable=False)
    weight = db.Column(db.Float, nullable=False)
    date = db.Column(db.Date, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'participant_id': self.participant_id,
            'weight': self.weight,
            'date': self.date.strftime('%Y-%m-%d')
        }
