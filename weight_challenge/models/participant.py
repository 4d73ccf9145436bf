from weight_challenge.app import db
from datetime import datetime

class ParticipantRecord(db.Model):
    __tablename__ = 'participants'

    id = db.Column(db.String(32), primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    start_weight = db.Column(db.Float, nullable=False)  # in kg
    goal_weight = db.Column(db.Float, nullable=False)  # in kg
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Entries go away together with their participant
    entries = db.relationship(
        'WeightEntry',
        backref='participant',
        lazy=True,
        order_by='WeightEntry.date',
        cascade='all, delete-orphan'
    )

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'start_weight': self.start_weight,
            'goal_weight': self.goal_weight,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat()
        }
