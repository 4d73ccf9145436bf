from flask import Blueprint, jsonify
from weight_challenge.core.progress import summarize
from weight_challenge.session import current_session, CelebrationTracker
from weight_challenge.routes.payload import json_body

participants_bp = Blueprint('participants', __name__)

def participant_payload(participant):
    payload = participant.to_dict()
    payload.update(summarize(participant))
    return payload

@participants_bp.route('', methods=['GET'])
def list_participants():
    session = current_session()
    return jsonify([participant_payload(p) for p in session.participants])

@participants_bp.route('', methods=['POST'])
def create_participant():
    data = json_body()
    session = current_session()

    participant = session.add_participant(
        name=data.get('name'),
        start_weight=data.get('start_weight'),
        goal_weight=data.get('goal_weight')
    )

    return jsonify(participant_payload(participant)), 201

@participants_bp.route('/<participant_id>', methods=['PUT'])
def update_participant(participant_id):
    data = json_body()
    session = current_session()

    # Entries are left as they are
    participant = session.update_participant(
        participant_id,
        name=data.get('name'),
        start_weight=data.get('start_weight'),
        goal_weight=data.get('goal_weight')
    )

    return jsonify(participant_payload(participant))

@participants_bp.route('/<participant_id>', methods=['DELETE'])
def delete_participant(participant_id):
    session = current_session()
    session.delete_participant(participant_id)
    return jsonify({'message': 'Participant deleted successfully', 'id': participant_id})

@participants_bp.route('/<participant_id>/celebration', methods=['POST'])
def celebrate(participant_id):
    session = current_session()
    participant = session.get(participant_id)
    show = CelebrationTracker(session.store).should_celebrate(participant)
    return jsonify({'show': show})
