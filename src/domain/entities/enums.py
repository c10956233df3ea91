"""
Client Service Domain Enums

All enumeration types used across domain entities and use cases.
"""

from enum import Enum


class ClientType(str, Enum):
    """Discriminator of the client union"""

    individual = "individual"
    business = "business"


class ClientStatus(str, Enum):
    """Client lifecycle status"""

    pending = "pending"
    active = "active"
    inactive = "inactive"
    deleted = "deleted"


class FolderStatus(str, Enum):
    """Folder workflow status"""

    active = "active"
    pending = "pending"
    completed = "completed"
    archived = "archived"
    pending_reassignment = "pending_reassignment"


class ClientPriority(str, Enum):
    low = "low"
    normal = "normal"
    high = "high"


class RiskLevel(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class Industry(str, Enum):
    """Business sectors"""

    agriculture = "agriculture"
    automotive = "automotive"
    banking = "banking"
    construction = "construction"
    consulting = "consulting"
    education = "education"
    energy = "energy"
    finance = "finance"
    food_beverage = "food_beverage"
    healthcare = "healthcare"
    hospitality = "hospitality"
    information_technology = "information_technology"
    insurance = "insurance"
    logistics = "logistics"
    manufacturing = "manufacturing"
    media = "media"
    mining = "mining"
    pharmaceutical = "pharmaceutical"
    real_estate = "real_estate"
    retail = "retail"
    telecommunications = "telecommunications"
    textiles = "textiles"
    transportation = "transportation"
    utilities = "utilities"
    other = "other"


class ContactType(str, Enum):
    """Role of a contact person attached to a business client"""

    primary = "primary"
    billing = "billing"
    delivery = "delivery"
    technical = "technical"
    emergency = "emergency"
    legal = "legal"
    other = "other"


class PaymentTerms(str, Enum):
    immediate = "immediate"
    net_15 = "net_15"
    net_30 = "net_30"
    net_45 = "net_45"
    net_60 = "net_60"
    net_90 = "net_90"
    custom = "custom"


# Number of days each fixed payment term stands for
PAYMENT_TERMS_DAYS = {
    PaymentTerms.immediate: 0,
    PaymentTerms.net_15: 15,
    PaymentTerms.net_30: 30,
    PaymentTerms.net_45: 45,
    PaymentTerms.net_60: 60,
    PaymentTerms.net_90: 90,
}


class PaymentMethod(str, Enum):
    bank_transfer = "bank_transfer"
    check = "check"
    cash = "cash"
    credit_card = "credit_card"
    debit_card = "debit_card"
    electronic_payment = "electronic_payment"
    cryptocurrency = "cryptocurrency"
    other = "other"


class LanguageCode(str, Enum):
    fr = "fr"
    en = "en"
    es = "es"
    de = "de"
    it = "it"
    nl = "nl"
    ar = "ar"


class DeletionType(str, Enum):
    soft = "soft"
    hard = "hard"


class FolderHandling(str, Enum):
    """What to do with active folders when their client is force-deleted"""

    archive = "archive"
    transfer = "transfer"


class FolderActionType(str, Enum):
    archived = "archived"
    transferred = "transferred"
    reassigned = "reassigned"


class ClientAuditAction(str, Enum):
    created = "created"
    updated = "updated"
    status_changed = "status_changed"
    deleted = "deleted"
    restored = "restored"


class BatchOperationType(str, Enum):
    create = "create"
    update = "update"
    delete = "delete"
    add_tags = "add_tags"
    remove_tags = "remove_tags"
    replace_tags = "replace_tags"
    update_status = "update_status"


class BatchItemStatus(str, Enum):
    success = "success"
    error = "error"


class IssueSeverity(str, Enum):
    error = "error"
    warning = "warning"
