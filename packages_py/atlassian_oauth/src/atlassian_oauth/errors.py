class OAuthSetupError(Exception):
    """Base exception for the OAuth setup flow."""
    pass


class OAuthStateMismatchError(OAuthSetupError):
    def __init__(self):
        super().__init__("OAuth state mismatch - possible CSRF attack")


class OAuthTimeoutError(OAuthSetupError):
    def __init__(self, timeout: float):
        super().__init__(f"Timeout waiting for OAuth callback ({timeout:g} seconds)")
        self.timeout = timeout
