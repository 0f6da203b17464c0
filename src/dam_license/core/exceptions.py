"""Custom exceptions for the dam_license package."""

from typing import Any


class DamLicenseException(Exception):
    """Base class for exceptions raised by dam_license."""

    pass


class AuthorizeError(DamLicenseException):
    """Raised when the current user of a Context may not perform an action on a resource."""

    def __init__(
        self,
        message: str,
        action: str,
        resource_id: int | None = None,
        user_id: int | None = None,
    ) -> None:
        super().__init__(message)
        self.action = action
        self.resource_id = resource_id
        self.user_id = user_id

    def __str__(self) -> str:
        base_str = super().__str__()
        details = f"Action: {self.action}"
        if self.resource_id is not None:
            details += f", Resource: {self.resource_id}"
        details += f", User: {self.user_id if self.user_id is not None else 'anonymous'}"
        return f"{base_str} ({details})"


class ItemNotFoundError(DamLicenseException, LookupError):
    """Raised when an entity id does not refer to an item."""

    pass


class BitstreamFormatNotFoundError(DamLicenseException, LookupError):
    """Raised when a bitstream format short description is not registered."""

    pass


class ScriptNotFoundError(DamLicenseException, LookupError):
    """Raised when no script runner is registered under a name."""

    pass


class ScriptExecutionError(DamLicenseException):
    """Raised when a script runner fails inside the script thread pool."""

    def __init__(
        self,
        message: str,
        script_name: str,
        args: Any = None,
        original_exception: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.script_name = script_name
        self.script_args = args
        self.original_exception = original_exception

    def __str__(self) -> str:
        base_str = super().__str__()
        details = f"Script: {self.script_name}"
        if self.original_exception:
            details += f", Original Error: {type(self.original_exception).__name__}: {self.original_exception}"
        return f"{base_str} ({details})"
