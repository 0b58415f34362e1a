"""Error taxonomy shared by the interview core, storage and API layers."""


class InterviewPrepError(Exception):
    """Base class for every error raised by this package."""


class StoreError(InterviewPrepError):
    """A persistence call failed (connection, constraint, missing row...)."""


class SessionNotFound(StoreError):
    def __init__(self, session_id: str):
        super().__init__(f"Interview session {session_id!r} does not exist")
        self.session_id = session_id


class SpeechError(InterviewPrepError):
    """Voice capability unsupported or the voice platform failed."""


class NotFound(InterviewPrepError):
    pass


class RoleNotFound(NotFound):
    def __init__(self, role_id: str):
        super().__init__(f"Unknown role {role_id!r}")
        self.role_id = role_id


class FeedbackNotFound(NotFound):
    def __init__(self, session_id: str):
        super().__init__(f"No feedback available for session {session_id!r}")
        self.session_id = session_id


class InterviewStateError(InterviewPrepError):
    """The requested transition is not valid for the current interview state."""


class InvalidAnswer(InterviewStateError):
    pass


class InterviewFinished(InterviewStateError):
    def __init__(self, session_id: str):
        super().__init__(f"Interview {session_id!r} has no more questions")
        self.session_id = session_id


class FeedbackAlreadyExists(InterviewStateError):
    def __init__(self, session_id: str):
        super().__init__(f"Feedback already generated for session {session_id!r}")
        self.session_id = session_id
