"""Domain errors exposed to API consumers.

Every failure a query can produce ends up as exactly one of these.
The request layer maps them to responses through ``status_code``.
"""

from typing import Any, ClassVar, Dict


class DomainError(Exception):
    """Base exception for query failures."""
    status_code: ClassVar[int] = 500
    error_code: ClassVar[str] = "INTERNAL_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.error_code, "message": self.message}


class InvalidInput(DomainError):
    """The request names something that is malformed or does not exist."""
    status_code: ClassVar[int] = 400
    error_code: ClassVar[str] = "INVALID_INPUT"


class RPCError(DomainError):
    """Transport or protocol failure talking to the node."""
    status_code: ClassVar[int] = 500
    error_code: ClassVar[str] = "RPC_ERROR"


class InternalError(DomainError):
    """A payload that should have been well-formed failed to decode."""
    status_code: ClassVar[int] = 500
    error_code: ClassVar[str] = "INTERNAL_ERROR"


class ContractNotFound(DomainError):
    """The contract has no code, or lacks the method, at the given height."""
    status_code: ClassVar[int] = 404
    error_code: ClassVar[str] = "CONTRACT_NOT_FOUND"

    def __init__(self, contract_id: str, block_height: int):
        super().__init__(
            f"The contract '{contract_id}' does not exist or does not implement "
            f"the requested method at block_height {block_height}"
        )
        self.contract_id = contract_id
        self.block_height = block_height

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(contract_id=self.contract_id, block_height=self.block_height)
        return data
