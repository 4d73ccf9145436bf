import pytest
from datetime import date, timedelta

TODAY = date(2024, 6, 5)  # a Wednesday
CUTOFF = date(2024, 12, 10)

@pytest.fixture
def client(app):
    """Test client with the challenge clock pinned to TODAY."""
    app.config['CHALLENGE_TODAY'] = TODAY
    return app.test_client()

def create(client, name='Ana', start=100, goal=80):
    response = client.post('/api/participants', json={
        'name': name,
        'start_weight': start,
        'goal_weight': goal
    })
    assert response.status_code == 201
    return response.get_json()

def add_entry(client, participant_id, weight, day):
    return client.post(f'/api/participants/{participant_id}/entries', json={
        'date': day,
        'weight': weight
    })

def test_create_participant(client):
    """Test creating a participant seeds one entry at the start weight"""
    data = create(client)

    assert data['name'] == 'Ana'
    assert data['entries'] == [{'date': TODAY.isoformat(), 'weight': 100.0}]
    assert data['progress'] == 0
    assert data['trend'] == 'lose'
    assert data['goal_reached'] is False

    listed = client.get('/api/participants').get_json()
    assert [p['id'] for p in listed] == [data['id']]

def test_create_participant_validation(client):
    response = client.post('/api/participants', json={'name': 'Ana', 'start_weight': 'heavy', 'goal_weight': 80})

    assert response.status_code == 400
    assert 'error' in response.get_json()
    assert client.get('/api/participants').get_json() == []

def test_add_entries_out_of_order(client):
    pid = create(client)['id']

    add_entry(client, pid, 90, '2000-03-06')
    response = add_entry(client, pid, 95, '2000-01-17')

    assert response.status_code == 201
    dates = [e['date'] for e in response.get_json()['entries']]
    assert dates[:2] == ['2000-01-17', '2000-03-06']

    # Latest entry by date drives progress
    participant = client.get('/api/participants').get_json()[0]
    assert participant['current_weight'] == 100.0

def test_add_entry_upsert(client):
    pid = create(client)['id']

    add_entry(client, pid, 80, '2000-01-03')
    response = add_entry(client, pid, 78, '2000-01-03')

    entries = response.get_json()['entries']
    assert [e for e in entries if e['date'] == '2000-01-03'] == [{'date': '2000-01-03', 'weight': 78.0}]

def test_add_entry_default_date(client):
    pid = create(client)['id']

    response = client.post(f'/api/participants/{pid}/entries', json={'weight': 99})

    assert response.status_code == 201
    assert {'date': '2024-06-10', 'weight': 99.0} in response.get_json()['entries']

def test_add_entry_deadline(client):
    pid = create(client)['id']

    rejected = add_entry(client, pid, 90, (CUTOFF + timedelta(days=1)).isoformat())
    accepted = add_entry(client, pid, 90, CUTOFF.isoformat())

    assert rejected.status_code == 422
    assert accepted.status_code == 201

def test_add_entry_bad_input(client):
    pid = create(client)['id']

    assert add_entry(client, pid, None, '2000-01-03').status_code == 400
    assert add_entry(client, pid, 'NaN', '2000-01-03').status_code == 400
    assert add_entry(client, pid, 80, '2000-02-30').status_code == 400
    assert add_entry(client, 'missing', 80, '2000-01-03').status_code == 404

def test_update_participant(client):
    pid = create(client)['id']
    add_entry(client, pid, 90, '2000-01-03')

    response = client.put(f'/api/participants/{pid}', json={
        'name': 'Ana B',
        'start_weight': 100,
        'goal_weight': 100
    })

    assert response.status_code == 200
    data = response.get_json()
    assert data['name'] == 'Ana B'
    assert data['trend'] == 'maintain'
    assert data['progress'] == 1
    assert len(data['entries']) == 2

def test_update_unknown_participant(client):
    response = client.put('/api/participants/missing', json={
        'name': 'X',
        'start_weight': 1,
        'goal_weight': 2
    })
    assert response.status_code == 404

def test_delete_participant(client):
    pid = create(client)['id']
    add_entry(client, pid, 90, '2000-01-03')

    response = client.delete(f'/api/participants/{pid}')

    assert response.status_code == 200
    assert client.get('/api/participants').get_json() == []
    assert client.delete(f'/api/participants/{pid}').status_code == 404

def test_leaderboard(client):
    ana = create(client, 'Ana', 100, 80)['id']
    bo = create(client, 'Bo', 70, 90)['id']
    add_entry(client, ana, 95, CUTOFF.isoformat())
    add_entry(client, bo, 85, CUTOFF.isoformat())

    ranking = client.get('/api/leaderboard').get_json()

    assert [row['name'] for row in ranking] == ['Bo', 'Ana']
    assert ranking[0]['progress'] == 0.75
    assert ranking[1]['progress'] == 0.25

def test_history_with_range(client):
    pid = create(client)['id']
    for day, weight in [('2000-01-03', 98), ('2000-01-10', 96), ('2000-01-17', 94.5)]:
        add_entry(client, pid, weight, day)

    response = client.get(f'/api/participants/{pid}/history?from=2000-01-10&to=2000-01-17')

    data = response.get_json()
    assert [e['date'] for e in data['entries']] == ['2000-01-10', '2000-01-17']
    assert data['stats']['first'] == 96
    assert data['stats']['last'] == 94.5
    assert data['stats']['direction'] == 'lose'

def test_history_empty_range(client):
    pid = create(client)['id']

    data = client.get(f'/api/participants/{pid}/history?from=1990-01-01&to=1990-12-31').get_json()

    assert data['entries'] == []
    assert data['stats'] is None

def test_history_csv(client):
    pid = create(client, 'Ana  Maria Lopez')['id']
    add_entry(client, pid, 97.5, '2000-01-03')

    response = client.get(f'/api/participants/{pid}/history.csv?to=2000-12-31')

    assert response.status_code == 200
    assert response.mimetype == 'text/csv'
    assert 'history_Ana_Maria_Lopez.csv' in response.headers['Content-Disposition']
    lines = response.get_data(as_text=True).splitlines()
    assert lines == [
        '"participantId","name","date","weight(kg)"',
        f'"{pid}","Ana  Maria Lopez","2000-01-03","97.5"'
    ]

def test_celebration(client):
    pid = create(client)['id']

    assert client.post(f'/api/participants/{pid}/celebration').get_json() == {'show': False}

    add_entry(client, pid, 80, CUTOFF.isoformat())

    assert client.post(f'/api/participants/{pid}/celebration').get_json() == {'show': True}
    assert client.post(f'/api/participants/{pid}/celebration').get_json() == {'show': False}

def test_challenge_info(client):
    data = client.get('/api/challenge').get_json()

    assert data['deadline'] == CUTOFF.isoformat()
    assert data['default_entry_date'] == '2024-06-10'
    assert data['days_left'] == 188

def test_malformed_dates_are_rejected(client):
    pid = create(client)['id']

    for bad in ('-', '--', ' ', 2024):
        response = add_entry(client, pid, 90, bad)
        assert response.status_code == 400
        assert 'error' in response.get_json()

    assert client.get(f'/api/participants/{pid}/history?from=%20').status_code == 400
    assert client.get(f'/api/participants/{pid}/history.csv?to=-').status_code == 400

def test_body_must_be_a_json_object(client):
    response = client.post('/api/participants', json=[1, 2])

    assert response.status_code == 400
    assert response.get_json() == {'error': 'Request body must be a JSON object'}

    pid = create(client)['id']
    assert client.put(f'/api/participants/{pid}', json=['Ana', 100, 80]).status_code == 400
    assert client.post(f'/api/participants/{pid}/entries', json='90').status_code == 400
    assert client.get('/api/participants').get_json()[0]['entries'] == [
        {'date': TODAY.isoformat(), 'weight': 100.0}
    ]
