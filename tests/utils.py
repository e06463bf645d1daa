import json


def send_json(client, method, path, data):
    """Send a JSON body with any HTTP method through the test client."""
    return getattr(client, method)(
        path, data=json.dumps(data), content_type='application/json'
    )
