from weight_challenge.core.domain import WeighIn


def merge_entry(existing, incoming):
    """
    Upsert a weigh-in keyed by date.
    Returns a new list sorted by date; the input sequence is left untouched.
    """
    by_date = {entry.date: entry.weight for entry in existing}
    by_date[incoming.date] = incoming.weight
    return [WeighIn(date=day, weight=weight) for day, weight in sorted(by_date.items())]


def filter_entries(entries, start=None, end=None):
    """Entries within the inclusive [start, end] range, either bound optional."""
    filtered = []
    for entry in sorted(entries, key=lambda e: e.date):
        if start is not None and entry.date < start:
            continue
        if end is not None and entry.date > end:
            continue
        filtered.append(entry)
    return filtered


def current_weight(participant):
    if participant.entries:
        return participant.entries[-1].weight
    return participant.start_weight
