"""Tests for health check endpoints."""


def test_health_check(client):
    """Health check endpoint should return healthy status."""
    response = client.get('/api/health')
    assert response.status_code == 200
    data = response.get_json()
    assert data['status'] == 'healthy'
    assert data['service'] == 'gymote-relay'


def test_readiness_check_reports_room_count(client, room_registry):
    """Readiness check should report how many rooms are live."""
    room_registry.get_or_create('R1')

    response = client.get('/api/health/ready')

    assert response.status_code == 200
    data = response.get_json()
    assert data['status'] == 'ready'
    assert data['rooms'] == 1
