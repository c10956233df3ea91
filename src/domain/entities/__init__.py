"""
Client Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    PAYMENT_TERMS_DAYS,
    BatchItemStatus,
    BatchOperationType,
    ClientAuditAction,
    ClientPriority,
    ClientStatus,
    ClientType,
    ContactType,
    DeletionType,
    FolderActionType,
    FolderHandling,
    FolderStatus,
    Industry,
    IssueSeverity,
    LanguageCode,
    PaymentMethod,
    PaymentTerms,
    RiskLevel,
)

# Export all entities
from .client import Client
from .folder import Folder
from .audit_event import ClientAuditEvent

__all__ = [
    # Enums
    "PAYMENT_TERMS_DAYS",
    "BatchItemStatus",
    "BatchOperationType",
    "ClientAuditAction",
    "ClientPriority",
    "ClientStatus",
    "ClientType",
    "ContactType",
    "DeletionType",
    "FolderActionType",
    "FolderHandling",
    "FolderStatus",
    "Industry",
    "IssueSeverity",
    "LanguageCode",
    "PaymentMethod",
    "PaymentTerms",
    "RiskLevel",
    # Entities
    "Client",
    "Folder",
    "ClientAuditEvent",
]
