class EnvNotFoundError(Exception):
    """Raised when a required environment variable is not found."""

    def __init__(self, env_var_name: str):
        super().__init__(f"Environment variable '{env_var_name}' not found.")


class MissingDBNameError(Exception):
    """Raised when a database operation needs a database name but none is configured."""

    def __init__(self):
        super().__init__("Database name is not set.")


class NoSessionError(Exception):
    """Raised when there is no active database session."""

    def __init__(self):
        super().__init__("No active database session found.")


class SessionNotSetError(Exception):
    """Raised when the database session is not set."""

    def __init__(self):
        super().__init__("Database session is not set.")


class RecordNotFoundError(LookupError):
    """Raised when a row expected to exist is missing."""

    def __init__(self, model_name: str, key: object):
        super().__init__(f"{model_name} with key '{key}' not found.")


class InsufficientBalanceError(Exception):
    """Raised when a wallet does not hold enough balance for a transfer."""

    def __init__(self, user_id: str, balance: int, amount: int):
        super().__init__(f"Wallet of user '{user_id}' holds {balance}, cannot transfer {amount}.")

