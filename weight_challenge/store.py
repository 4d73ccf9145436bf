import json
import logging
from datetime import date

from weight_challenge.app import db
from weight_challenge.core.dates import format_date_iso
from weight_challenge.core.domain import Participant, WeighIn
from weight_challenge.errors import ParticipantNotFound, ValidationError
from weight_challenge.models.participant import ParticipantRecord
from weight_challenge.models.scoped_value import ScopedValue
from weight_challenge.models.weight import WeightEntry

logger = logging.getLogger(__name__)


class ParticipantStore:
    """Durable storage for participants and their weigh-ins."""

    def __init__(self, session=None):
        self._session = session if session is not None else db.session

    def _commit(self):
        try:
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

    def _get_record(self, participant_id):
        record = self._session.get(ParticipantRecord, participant_id)
        if record is None:
            raise ParticipantNotFound(participant_id)
        return record

    def list_all(self, today=None):
        """
        All participants with entries sorted by date.
        A participant without stored entries gets a seed entry at its start
        weight dated today; the seed is not persisted.
        """
        records = self._session.scalars(
            db.select(ParticipantRecord).order_by(ParticipantRecord.created_at, ParticipantRecord.id)
        ).all()
        return [_to_participant(record, today) for record in records]

    def create_participant(self, participant_id, name, start_weight, goal_weight, created_on=None):
        if self._session.get(ParticipantRecord, participant_id) is not None:
            raise ValidationError(f"Participant {participant_id} already exists")
        if created_on is None:
            created_on = date.today()

        record = ParticipantRecord(
            id=participant_id,
            name=name,
            start_weight=float(start_weight),
            goal_weight=float(goal_weight)
        )
        # Seed entry at the starting weight
        record.entries.append(WeightEntry(date=created_on, weight=float(start_weight)))

        self._session.add(record)
        self._commit()
        logger.info("Created participant %s (%s)", participant_id, name)
        return _to_participant(record)

    def add_entry(self, participant_id, day, weight):
        """Insert or replace the weigh-in for ``day``."""
        self._get_record(participant_id)

        entry = self._session.scalars(
            db.select(WeightEntry).filter_by(participant_id=participant_id, date=day)
        ).first()
        if entry is None:
            entry = WeightEntry(participant_id=participant_id, date=day, weight=float(weight))
            self._session.add(entry)
        else:
            entry.weight = float(weight)

        self._commit()
        logger.info("Upserted entry %s for participant %s: %s", format_date_iso(day), participant_id, weight)
        return WeighIn(date=entry.date, weight=entry.weight)

    def update_participant(self, participant_id, name, start_weight, goal_weight):
        record = self._get_record(participant_id)
        record.name = name
        record.start_weight = float(start_weight)
        record.goal_weight = float(goal_weight)

        self._commit()
        logger.info("Updated participant %s", participant_id)
        return _to_participant(record)

    def delete_participant(self, participant_id):
        record = self._get_record(participant_id)
        # Entries are removed by the cascade in the same transaction
        self._session.delete(record)
        self._commit()
        logger.info("Deleted participant %s", participant_id)

    def get_value(self, scope, key, default=None):
        row = self._session.get(ScopedValue, (scope, key))
        if row is None:
            return default
        return json.loads(row.value)

    def set_value(self, scope, key, value):
        row = self._session.get(ScopedValue, (scope, key))
        if row is None:
            row = ScopedValue(scope=scope, key=key, value=json.dumps(value))
            self._session.add(row)
        else:
            row.value = json.dumps(value)
        self._commit()

    def delete_value(self, scope, key):
        row = self._session.get(ScopedValue, (scope, key))
        if row is not None:
            self._session.delete(row)
            self._commit()


def _to_participant(record, today=None):
    entries = [WeighIn(date=entry.date, weight=entry.weight) for entry in record.entries]
    if not entries:
        entries = [WeighIn(date=today or date.today(), weight=record.start_weight)]
    entries.sort(key=lambda entry: entry.date)
    return Participant(
        id=record.id,
        name=record.name,
        start_weight=record.start_weight,
        goal_weight=record.goal_weight,
        entries=tuple(entries)
    )
