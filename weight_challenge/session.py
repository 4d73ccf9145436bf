import logging
import math
import uuid
from datetime import date

from flask import current_app, g
from sqlalchemy.exc import SQLAlchemyError

from weight_challenge.core.dates import (
    DEADLINE_DAY,
    DEADLINE_MONTH,
    deadline,
    is_past_deadline,
    next_monday,
)
from weight_challenge.core.domain import Participant, WeighIn
from weight_challenge.core.entries import filter_entries, merge_entry
from weight_challenge.core.progress import goal_reached, history_stats, leaderboard, participant_progress
from weight_challenge.errors import DeadlinePassed, LoadError, ParticipantNotFound, ValidationError
from weight_challenge.store import ParticipantStore

logger = logging.getLogger(__name__)

CELEBRATIONS_SCOPE = 'celebrations'
LOAD_ERROR_MESSAGE = "Could not load participants from the store"


def new_participant_id():
    return uuid.uuid4().hex[:8]


def require_finite(value, field):
    """Coerce a numeric input, rejecting missing or non-finite values."""
    if value is None or value == '':
        raise ValidationError(f"{field} is required")
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{field} must be a finite number")
    return number


def require_name(value):
    name = (value or '').strip() if isinstance(value, str) else ''
    if not name:
        raise ValidationError("Name is required")
    return name


class ChallengeSession:
    """
    In-memory participant list for one session.

    Populated once through ``load`` and changed only through the methods
    below, each of which persists first and updates the local list only
    after the store call succeeds.
    """

    def __init__(self, store, today=None, deadline_month=DEADLINE_MONTH, deadline_day=DEADLINE_DAY):
        self.store = store
        self.today = today or date.today()
        self.deadline_month = deadline_month
        self.deadline_day = deadline_day
        self.loaded = False
        self.error = None
        self._participants = []

    @property
    def participants(self):
        return tuple(self._participants)

    @property
    def deadline(self):
        return deadline(self.today, self.deadline_month, self.deadline_day)

    def load(self):
        try:
            participants = self.store.list_all(today=self.today)
        except SQLAlchemyError as e:
            logger.exception("Failed to load participants")
            self._participants = []
            self.error = LOAD_ERROR_MESSAGE
            raise LoadError(LOAD_ERROR_MESSAGE) from e

        self._participants = list(participants)
        self.error = None
        self.loaded = True
        logger.debug("Loaded %d participants", len(self._participants))
        return self.participants

    def get(self, participant_id):
        for participant in self._participants:
            if participant.id == participant_id:
                return participant
        raise ParticipantNotFound(participant_id)

    def _replace(self, participant):
        self._participants = [
            participant if p.id == participant.id else p for p in self._participants
        ]

    def add_participant(self, name, start_weight, goal_weight):
        name = require_name(name)
        start = require_finite(start_weight, 'Start weight')
        goal = require_finite(goal_weight, 'Goal weight')

        participant = Participant(
            id=new_participant_id(),
            name=name,
            start_weight=start,
            goal_weight=goal,
            entries=(WeighIn(date=self.today, weight=start),)
        )
        self.store.create_participant(participant.id, name, start, goal, created_on=self.today)
        self._participants.append(participant)
        return participant

    def add_entry(self, participant_id, weight, day=None):
        weight = require_finite(weight, 'Weight')
        if day is None:
            day = next_monday(self.today)
        if is_past_deadline(day, self.today, self.deadline_month, self.deadline_day):
            raise DeadlinePassed(day, self.deadline)

        entry = self.store.add_entry(participant_id, day, weight)
        participant = self.get(participant_id)
        participant = participant.with_entries(merge_entry(participant.entries, entry))
        self._replace(participant)
        return participant

    def update_participant(self, participant_id, name, start_weight, goal_weight):
        name = require_name(name)
        start = require_finite(start_weight, 'Start weight')
        goal = require_finite(goal_weight, 'Goal weight')

        self.store.update_participant(participant_id, name, start, goal)
        participant = self.get(participant_id).with_details(name, start, goal)
        self._replace(participant)
        return participant

    def delete_participant(self, participant_id):
        self.store.delete_participant(participant_id)
        self._participants = [p for p in self._participants if p.id != participant_id]
        CelebrationTracker(self.store).forget(participant_id)

    def leaderboard(self):
        return leaderboard(self._participants)

    def history(self, participant_id, start=None, end=None):
        participant = self.get(participant_id)
        entries = filter_entries(participant.entries, start, end)
        return participant, entries, history_stats(participant, entries)


class CelebrationTracker:
    """Remembers which participants have already been congratulated."""

    def __init__(self, store, scope=CELEBRATIONS_SCOPE):
        self.store = store
        self.scope = scope

    def already_shown(self, participant_id):
        return bool(self.store.get_value(self.scope, participant_id, False))

    def should_celebrate(self, participant):
        """True exactly once per participant, after its goal is reached."""
        if not goal_reached(participant_progress(participant)):
            return False
        if self.already_shown(participant.id):
            return False
        self.store.set_value(self.scope, participant.id, True)
        return True

    def forget(self, participant_id):
        self.store.delete_value(self.scope, participant_id)


def current_session():
    """Request-scoped session, loaded on first use."""
    if 'challenge_session' not in g:
        session = ChallengeSession(
            ParticipantStore(),
            today=current_app.config.get('CHALLENGE_TODAY'),
            deadline_month=current_app.config['CHALLENGE_DEADLINE_MONTH'],
            deadline_day=current_app.config['CHALLENGE_DEADLINE_DAY']
        )
        session.load()
        g.challenge_session = session
    return g.challenge_session


def init_app(app):
    @app.teardown_request
    def drop_session(exc):
        g.pop('challenge_session', None)
