"""
Client Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the client domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Annotated, Any, ClassVar, Dict, List, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, TypeAdapter, model_validator

from src.domain.entities import (
    Client,
    ClientPriority,
    ClientStatus,
    ClientType,
    ContactType,
    DeletionType,
    FolderActionType,
    FolderHandling,
    LanguageCode,
    PaymentMethod,
    PaymentTerms,
    RiskLevel,
)


# ============================================================================
# Client sections (stored as JSON columns)
# ============================================================================


class Address(BaseModel):
    model_config = ConfigDict(extra="allow")

    street: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None


class ContactInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    email: EmailStr
    phone: Optional[str] = None
    mobile: Optional[str] = None
    address: Optional[Address] = None


class IndividualInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    date_of_birth: Optional[str] = None


class BusinessInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    company_name: str = Field(..., min_length=1)
    industry: Optional[str] = None
    registration_number: Optional[str] = None
    legal_info: Optional[Dict[str, Any]] = None
    contacts: Optional[List[Dict[str, Any]]] = None


class CommercialInfo(BaseModel):
    """Commercial terms; every field has the documented default"""

    model_config = ConfigDict(extra="allow")

    credit_limit: float = Field(default=0, ge=0)
    credit_limit_currency: str = "EUR"
    payment_terms_days: int = Field(default=30, ge=0)
    payment_terms: PaymentTerms = PaymentTerms.net_30
    payment_methods: List[PaymentMethod] = Field(
        default_factory=lambda: [PaymentMethod.bank_transfer]
    )
    preferred_language: LanguageCode = LanguageCode.fr
    priority: ClientPriority = ClientPriority.normal
    risk_level: RiskLevel = RiskLevel.low


class CommercialHistory(BaseModel):
    """Server-maintained aggregates, zeroed at creation"""

    total_orders_amount: float = 0
    total_orders_count: int = 0
    current_balance: float = 0
    average_payment_delay_days: float = 0


# ============================================================================
# Command DTOs
# ============================================================================


class _CreateClientBase(BaseModel):
    """Fields shared by both client variants"""

    model_config = ConfigDict(extra="ignore")

    foreign_section: ClassVar[str] = ""

    contact_info: ContactInfo
    commercial_info: CommercialInfo = Field(default_factory=CommercialInfo)
    tags: List[str] = Field(default_factory=list)
    internal_notes: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def reject_foreign_section(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get(cls.foreign_section) is not None:
            raise ValueError(
                f"{cls.foreign_section} is not allowed for this client type"
            )
        return data


class CreateIndividualClientCommand(_CreateClientBase):
    foreign_section: ClassVar[str] = "business_info"

    client_type: Literal["individual"]
    individual_info: IndividualInfo


class CreateBusinessClientCommand(_CreateClientBase):
    foreign_section: ClassVar[str] = "individual_info"

    client_type: Literal["business"]
    business_info: BusinessInfo


CreateClientCommand = Annotated[
    Union[CreateIndividualClientCommand, CreateBusinessClientCommand],
    Field(discriminator="client_type"),
]

create_client_command_adapter = TypeAdapter(CreateClientCommand)


class DeleteClientCommand(BaseModel):
    """Deletion parameters shared by single and batch deletion"""

    deletion_type: DeletionType = DeletionType.soft
    reason: Optional[str] = Field(default=None, max_length=500)
    force: bool = False
    handle_folders: Optional[FolderHandling] = None
    transfer_to_client_id: Optional[UUID] = None


class ListClientsQuery(BaseModel):
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=100)
    statuses: List[ClientStatus] = Field(default_factory=list)
    client_types: List[ClientType] = Field(default_factory=list)


# ============================================================================
# Response DTOs
# ============================================================================


class ClientResponse(BaseModel):
    """Client as returned to callers"""

    id: UUID
    client_type: ClientType
    status: ClientStatus
    display_name: str
    individual_info: Optional[Dict[str, Any]] = None
    business_info: Optional[Dict[str, Any]] = None
    contact_info: Dict[str, Any]
    commercial_info: Dict[str, Any]
    commercial_history: Dict[str, Any]
    tags: List[str]
    internal_notes: Optional[str] = None
    created_by: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[UUID] = None
    deletion_reason: Optional[str] = None

    @classmethod
    def from_entity(cls, client: Client) -> "ClientResponse":
        return cls(
            id=client.id,
            client_type=client.client_type,
            status=client.status,
            display_name=client.display_name,
            individual_info=client.individual_info,
            business_info=client.business_info,
            contact_info=client.contact_info or {},
            commercial_info=client.commercial_info or {},
            commercial_history=client.commercial_history or {},
            tags=list(client.tags or []),
            internal_notes=client.internal_notes,
            created_by=client.created_by,
            created_at=client.created_at,
            updated_at=client.updated_at,
            deleted_at=client.deleted_at,
            deleted_by=client.deleted_by,
            deletion_reason=client.deletion_reason,
        )


class ClientListResponse(BaseModel):
    items: List[ClientResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class FolderActionInfo(BaseModel):
    """One cascade action applied to a folder of a deleted client"""

    folder_id: UUID
    action: FolderActionType
    target_client_id: Optional[UUID] = None


class DeleteClientResponse(BaseModel):
    success: bool
    deletion_type: DeletionType
    affected_folders_count: int
    folder_actions: List[FolderActionInfo]
    deleted_at: datetime


class ClientStatisticsResponse(BaseModel):
    client_id: UUID
    total_folders: int
    active_folders: int
    folders_by_status: Dict[str, int]
    total_revenue: float
    total_orders_count: int
    current_balance: float
    credit_limit: float
    available_credit: float
    revenue_currency: str
    average_payment_delay_days: float
    period_start: datetime
    period_end: datetime
    calculated_at: datetime


# ============================================================================
# Contact DTOs (business_info.contacts)
# ============================================================================


class ContactCommand(BaseModel):
    """New contact person of a business client"""

    model_config = ConfigDict(extra="allow")

    first_name: str = Field(..., max_length=50)
    last_name: str = Field(..., max_length=50)
    email: Optional[str] = None
    phone: Optional[str] = None
    title: Optional[str] = Field(default=None, max_length=100)
    department: Optional[str] = Field(default=None, max_length=100)
    contact_type: Optional[ContactType] = None
    is_primary: bool = False


class UpdateContactCommand(BaseModel):
    """Partial contact update; only the fields sent are applied"""

    model_config = ConfigDict(extra="allow")

    first_name: Optional[str] = Field(default=None, max_length=50)
    last_name: Optional[str] = Field(default=None, max_length=50)
    email: Optional[str] = None
    phone: Optional[str] = None
    title: Optional[str] = Field(default=None, max_length=100)
    department: Optional[str] = Field(default=None, max_length=100)
    contact_type: Optional[ContactType] = None
    is_primary: Optional[bool] = None


class ContactResponse(BaseModel):
    """A stored contact, addressed by its position in the list"""

    model_config = ConfigDict(extra="allow")

    index: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    contact_type: Optional[str] = None
    is_primary: bool = False

    @classmethod
    def from_contact(cls, index: int, contact: Dict[str, Any]) -> "ContactResponse":
        return cls(**{**contact, "index": index})


class ContactListResponse(BaseModel):
    client_id: UUID
    items: List[ContactResponse]
    total: int
