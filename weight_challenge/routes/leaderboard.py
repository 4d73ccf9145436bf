from flask import Blueprint, jsonify
from weight_challenge.core.dates import days_left, format_date_iso, next_monday
from weight_challenge.session import current_session

leaderboard_bp = Blueprint('leaderboard', __name__)

@leaderboard_bp.route('/leaderboard', methods=['GET'])
def get_leaderboard():
    return jsonify(current_session().leaderboard())

@leaderboard_bp.route('/challenge', methods=['GET'])
def get_challenge():
    session = current_session()
    return jsonify({
        'deadline': format_date_iso(session.deadline),
        'days_left': days_left(session.today, session.deadline_month, session.deadline_day),
        'default_entry_date': format_date_iso(next_monday(session.today))
    })
