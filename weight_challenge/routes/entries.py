import io
from flask import Blueprint, request, jsonify, send_file
from weight_challenge.core.dates import parse_date
from weight_challenge.errors import ValidationError
from weight_challenge.export import entries_to_csv, export_filename
from weight_challenge.session import current_session
from weight_challenge.routes.payload import json_body

entries_bp = Blueprint('entries', __name__)

def parse_date_arg(value, field):
    if not value:
        return None
    try:
        return parse_date(value)
    except (AttributeError, TypeError, ValueError):
        raise ValidationError(f"{field} must be a date in YYYY-MM-DD format")

@entries_bp.route('/<participant_id>/entries', methods=['POST'])
def add_entry(participant_id):
    data = json_body()
    session = current_session()

    # Date defaults to the next Monday
    day = parse_date_arg(data.get('date'), 'Date')
    participant = session.add_entry(participant_id, data.get('weight'), day)

    return jsonify({
        'participant_id': participant.id,
        'entries': [entry.to_dict() for entry in participant.entries]
    }), 201

@entries_bp.route('/<participant_id>/history', methods=['GET'])
def get_history(participant_id):
    start = parse_date_arg(request.args.get('from'), 'from')
    end = parse_date_arg(request.args.get('to'), 'to')

    participant, entries, stats = current_session().history(participant_id, start, end)

    return jsonify({
        'participant': {
            'id': participant.id,
            'name': participant.name
        },
        'entries': [entry.to_dict() for entry in entries],
        'stats': stats
    })

@entries_bp.route('/<participant_id>/history.csv', methods=['GET'])
def export_history(participant_id):
    start = parse_date_arg(request.args.get('from'), 'from')
    end = parse_date_arg(request.args.get('to'), 'to')

    participant, entries, _ = current_session().history(participant_id, start, end)

    csv_bytes = entries_to_csv(participant, entries).encode('utf-8')
    return send_file(
        io.BytesIO(csv_bytes),
        mimetype='text/csv',
        as_attachment=True,
        download_name=export_filename(participant)
    )
