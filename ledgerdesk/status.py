"""Outcome messages for company operations."""

from __future__ import annotations

from enum import Enum


class _MessageEnum(Enum):
    def __str__(self) -> str:
        return self.value

    @property
    def message(self) -> str:
        return self.value


class CompanyError(_MessageEnum):
    """Reasons a company operation can fail."""

    INVALID_ID = "Invalid company ID or user ID"
    FORBIDDEN = "Forbidden: You don't have permission to perform this action"
    NOT_FOUND = "Company or user not found"
    USER_ALREADY_ADDED = "User already added to this company"
    USER_ALREADY_REMOVED = "User already removed from this company"
    INVALID_COMPANY_DATA = "Company creation failed due to invalid name or description"
    INTERNAL_ERROR = "Internal server error"


class CompanySuccess(_MessageEnum):
    """Successful company operation outcomes."""

    USER_ADDED = "User added to company"
    USER_REMOVED = "User removed from company"
    COMPANY_CREATED = "Company created successfully"
    UPDATE_SUCCESS = "Company updated successfully"
    DELETE_SUCCESS = "Company deleted successfully"