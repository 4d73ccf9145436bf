import math

from weight_challenge.core.entries import current_weight

GOAL_EPSILON = 1e-6

LOSE = 'lose'
MAINTAIN = 'maintain'
GAIN = 'gain'


def clamp(value, lower=0.0, upper=1.0):
    return max(lower, min(upper, value))


def compute_progress(start, goal, current):
    """
    Fraction of the distance from start to goal already covered, in [0, 1].
    A maintenance goal (start == goal) always counts as complete.
    """
    if start == goal:
        return 1
    if goal < start:
        return clamp((start - current) / (start - goal))
    return clamp((current - start) / (goal - start))


def trend_label(start, goal):
    if goal == start:
        return MAINTAIN
    return LOSE if goal < start else GAIN


def goal_reached(progress, epsilon=GOAL_EPSILON):
    return progress >= 1 - epsilon


def progress_pct(progress):
    # Half-up rounding to a whole percent
    return int(math.floor(progress * 100 + 0.5))


def participant_progress(participant):
    return compute_progress(participant.start_weight, participant.goal_weight,
                            current_weight(participant))


def remaining_weight(participant):
    return abs(participant.goal_weight - current_weight(participant))


def summarize(participant):
    """Computed figures shown next to a participant."""
    progress = participant_progress(participant)
    return {
        'current_weight': current_weight(participant),
        'progress': progress,
        'progress_pct': progress_pct(progress),
        'trend': trend_label(participant.start_weight, participant.goal_weight),
        'goal_reached': goal_reached(progress),
        'remaining': remaining_weight(participant)
    }


def history_stats(participant, entries):
    """Summary of a (possibly filtered) slice of a participant's entries."""
    if not entries:
        return None

    first = entries[0].weight
    last = entries[-1].weight
    progress = compute_progress(participant.start_weight, participant.goal_weight, last)
    return {
        'first': first,
        'last': last,
        'delta': last - first,
        'progress_pct': progress_pct(progress),
        'direction': trend_label(participant.start_weight, participant.goal_weight),
        'goal': participant.goal_weight,
        'start': participant.start_weight
    }


def leaderboard(participants):
    """Participants ranked by progress, best first. Ties keep input order."""
    ranked = [
        {'id': p.id, 'name': p.name, 'progress': participant_progress(p)}
        for p in participants
    ]
    return sorted(ranked, key=lambda row: row['progress'], reverse=True)
