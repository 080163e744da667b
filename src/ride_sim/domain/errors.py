# ride_sim/domain/errors.py


class InvalidArgumentError(ValueError):
    """Malformed input or a lookup that found nothing; the message carries the detail."""
