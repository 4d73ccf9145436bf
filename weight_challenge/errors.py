class ChallengeError(Exception):
    """Base error for the weight challenge service"""
    status_code = 400


class ValidationError(ChallengeError):
    """Missing or non-finite input rejected before reaching the store"""
    status_code = 400


class ParticipantNotFound(ChallengeError):
    status_code = 404

    def __init__(self, participant_id):
        super().__init__(f"Participant {participant_id} does not exist")
        self.participant_id = participant_id


class DeadlinePassed(ChallengeError):
    status_code = 422

    def __init__(self, day, cutoff):
        super().__init__(
            f"Weigh-in date {day.isoformat()} is after the deadline ({cutoff.isoformat()})"
        )
        self.day = day
        self.cutoff = cutoff


class LoadError(ChallengeError):
    """Participants could not be loaded from the store"""
    status_code = 503
