from typing import Any, List


def _response_body(data: Any, errors: List[str]) -> Any:
    if not isinstance(data, dict):
        errors.append("Payload must be a JSON object")
        return None
    body = data.get("response")
    if not isinstance(body, dict):
        errors.append("Missing required object: response")
        return None
    return body


def validate_vanity_response(data: Any) -> List[str]:
    """
    Returns a list of validation error messages for a ResolveVanityURL payload.
    Empty list means valid. A missing steamid is valid; it means no match.
    """
    errors: List[str] = []
    body = _response_body(data, errors)
    if body is None:
        return errors
    if "steamid" in body and not isinstance(body["steamid"], str):
        errors.append("Field 'response.steamid' must be a string if provided")
    return errors


def validate_player_summaries(data: Any) -> List[str]:
    """Validation messages for a GetPlayerSummaries payload."""
    errors: List[str] = []
    body = _response_body(data, errors)
    if body is None:
        return errors
    if "players" not in body:
        errors.append("Missing required field: response.players")
    elif not isinstance(body["players"], list):
        errors.append("Field 'response.players' must be a list")
    return errors


def validate_owned_games(data: Any) -> List[str]:
    """
    Validation messages for a GetOwnedGames payload.

    Only the envelope is checked; the games list is passed through as-is.
    Private profiles come back with an empty response object.
    """
    errors: List[str] = []
    body = _response_body(data, errors)
    if body is None:
        return errors
    if "games" in body and not isinstance(body["games"], list):
        errors.append("Field 'response.games' must be a list if provided")
    return errors
