from flask import request
from weight_challenge.errors import ValidationError

def json_body():
    """Request body as a dict; an empty or unparsable body counts as {}."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
