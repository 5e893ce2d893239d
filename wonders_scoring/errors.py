class ScoringValidationError(ValueError):
    """Raised when a caller hands the engine input that can never score.

    Negative counts, malformed seating rings and references to players who
    are not seated all land here. Retrying with the same input fails the
    same way; the snapshot has to be fixed.
    """
