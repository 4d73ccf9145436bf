import csv
import io
import re

CSV_HEADER = ['participantId', 'name', 'date', 'weight(kg)']


def format_weight(weight):
    weight = float(weight)
    if weight.is_integer():
        return str(int(weight))
    return repr(weight)


def entries_to_csv(participant, entries):
    """One quoted row per entry, internal quotes doubled."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator='\n')
    writer.writerow(CSV_HEADER)
    for entry in entries:
        writer.writerow([
            participant.id,
            participant.name,
            entry.date.strftime('%Y-%m-%d'),
            format_weight(entry.weight)
        ])
    return buffer.getvalue()


def export_filename(participant):
    name = re.sub(r"\s+", "_", participant.name)
    return f"history_{name}.csv"
