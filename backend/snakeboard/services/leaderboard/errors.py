class LeaderboardError(Exception):
    """Base class for errors reported to leaderboard callers.

    ``message`` is what clients see; ``reason`` is the detail worth logging.
    """

    status_code = 400
    message = 'Leaderboard error'

    def __init__(self, reason=None):
        self.reason = reason or self.message
        super().__init__(self.reason)


class InvalidPayload(LeaderboardError):
    message = 'Invalid payload'


class NameRequired(LeaderboardError):
    message = 'Name required'


class MethodNotAllowed(LeaderboardError):
    status_code = 405
    message = 'Method not allowed'


class StorageUnavailable(LeaderboardError):
    status_code = 500
    message = 'Storage unavailable'


class StoreNotConfigured(StorageUnavailable):
    message = 'Database not configured'
