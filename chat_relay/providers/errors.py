class ProviderError(RuntimeError):
    """Base error for inference provider calls."""


class ProviderConfigError(ProviderError):
    """Raised when a provider is missing required configuration."""


class ProviderRequestError(ProviderError):
    """Raised when the upstream request fails before a response arrives."""
