class StartupError(RuntimeError):
    """A mandatory resource could not be loaded; the server cannot run without it."""


class WordListError(StartupError):
    pass


class DictionaryError(StartupError):
    pass


class SessionNotFound(KeyError):
    def __init__(self, session_id: str):
        super().__init__(session_id)
        self.session_id = session_id
