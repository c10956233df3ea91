"""
Client Validation Service

Structural, business-rule, uniqueness and update-constraint checks for
client payloads. Every check returns a ValidationResult; nothing here raises
for bad data. Repository failures during uniqueness checks propagate.

The service reads through ``uow.clients`` and never opens or commits a
transaction itself: callers hand it a unit of work they already entered.
"""

import re
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Union
from uuid import UUID

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    PAYMENT_TERMS_DAYS,
    Client,
    ClientPriority,
    ClientStatus,
    ClientType,
    ContactType,
    Industry,
    IssueSeverity,
    LanguageCode,
    PaymentMethod,
    PaymentTerms,
    RiskLevel,
)

HIGH_CREDIT_LIMIT_THRESHOLD = 500_000
CREDIT_RISK_THRESHOLD = 50_000
LOW_ORDER_HISTORY_THRESHOLD = 1_000
LONG_PAYMENT_TERMS_DAYS = 365
MAX_TAGS = 50
MAX_TEXT_LENGTH = 5_000
MAX_PERSON_NAME_LENGTH = 50
MAX_COMPANY_NAME_LENGTH = 100
MIN_AGE = 16
MAX_AGE = 120

PHONE_PATTERN = re.compile(r"^\+?[\d\s\-.()]+$")
PHONE_MIN_DIGITS = 8
PHONE_MAX_DIGITS = 15
CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")
VAT_PATTERN = re.compile(r"^[A-Z]{2}[0-9A-Z]{2,13}$")
SIRET_PATTERN = re.compile(r"^[0-9]{14}$")

POSTAL_CODE_PATTERNS = {
    "FR": re.compile(r"^\d{5}$"),
    "US": re.compile(r"^\d{5}(-\d{4})?$"),
    "GB": re.compile(r"^[A-Z]{1,2}\d[A-Z\d]?\s?\d[A-Z]{2}$", re.IGNORECASE),
    "DE": re.compile(r"^\d{5}$"),
    "ES": re.compile(r"^\d{5}$"),
    "IT": re.compile(r"^\d{5}$"),
    "MA": re.compile(r"^\d{5}$"),
    "DZ": re.compile(r"^\d{5}$"),
    "SN": re.compile(r"^\d{5}$"),
    "BE": re.compile(r"^\d{4}$"),
    "CH": re.compile(r"^\d{4}$"),
    "TN": re.compile(r"^\d{4}$"),
    "NL": re.compile(r"^\d{4}\s?[A-Z]{2}$", re.IGNORECASE),
    "LU": re.compile(r"^(L-)?\d{4}$"),
    "PT": re.compile(r"^\d{4}-\d{3}$"),
}

# Allowed status edges; deleted is only reachable through deletion
ALLOWED_STATUS_TRANSITIONS = {
    ClientStatus.pending: {ClientStatus.active},
    ClientStatus.active: {ClientStatus.inactive},
    ClientStatus.inactive: {ClientStatus.active},
    ClientStatus.deleted: set(),
}

MESSAGES = {
    "en": {
        "REQUIRED_FIELD": "{label} is required",
        "INVALID_FORMAT": "Invalid {label} format",
        "INVALID_VALUE": "{label} cannot be negative",
        "INVALID_ENUM_VALUE": "Invalid value '{value}' for {label}",
        "INVALID_DATE": "Invalid birth date",
        "MAX_LENGTH": "{label} too long (max {max} characters)",
        "TEXT_TOO_LONG": "Text too long (max {max} characters)",
        "PRIMARY_CONTACT_REQUIRED": "At least one primary contact is required",
        "CLIENT_TYPE_MISMATCH": "{label} does not match client type '{client_type}'",
        "DUPLICATE_VALUE": "{label} already exists",
        "INVALID_STATUS_TRANSITION": "Cannot change status from '{current}' to '{target}'",
        "CREDIT_LIMIT_BELOW_BALANCE": (
            "Credit limit {credit_limit} is below the current balance {balance}"
        ),
        "AGE_WARNING": "Client appears to be under {min_age} years old",
        "MULTIPLE_PRIMARY_CONTACTS": "Multiple primary contacts found",
        "VAT_FORMAT_WARNING": "VAT number format may be invalid",
        "LONG_PAYMENT_TERMS": "Payment terms exceed one year",
        "HIGH_CREDIT_LIMIT": "High credit limit amount",
        "TOO_MANY_TAGS": "More than {max} tags",
        "CREDIT_RISK_MISMATCH": "High credit limit granted to a high-risk client",
        "PAYMENT_TERMS_INCONSISTENCY": (
            "Payment terms '{terms}' do not match {days} payment days"
        ),
        "PRIORITY_HISTORY_MISMATCH": "High priority client with little order history",
    },
    "fr": {
        "REQUIRED_FIELD": "{label} est obligatoire",
        "INVALID_FORMAT": "Format invalide : {label}",
        "INVALID_VALUE": "{label} ne peut pas être négatif",
        "INVALID_ENUM_VALUE": "Valeur '{value}' invalide pour {label}",
        "INVALID_DATE": "Date de naissance invalide",
        "MAX_LENGTH": "{label} trop long (maximum {max} caractères)",
        "TEXT_TOO_LONG": "Texte trop long (maximum {max} caractères)",
        "PRIMARY_CONTACT_REQUIRED": "Au moins un contact principal est requis",
        "CLIENT_TYPE_MISMATCH": "{label} ne correspond pas au type de client '{client_type}'",
        "DUPLICATE_VALUE": "{label} existe déjà",
        "INVALID_STATUS_TRANSITION": (
            "Impossible de passer du statut '{current}' au statut '{target}'"
        ),
        "CREDIT_LIMIT_BELOW_BALANCE": (
            "La limite de crédit {credit_limit} est inférieure au solde actuel {balance}"
        ),
        "AGE_WARNING": "Le client semble avoir moins de {min_age} ans",
        "MULTIPLE_PRIMARY_CONTACTS": "Plusieurs contacts principaux trouvés",
        "VAT_FORMAT_WARNING": "Le format du numéro de TVA semble invalide",
        "LONG_PAYMENT_TERMS": "Les délais de paiement dépassent un an",
        "HIGH_CREDIT_LIMIT": "Limite de crédit élevée",
        "TOO_MANY_TAGS": "Plus de {max} étiquettes",
        "CREDIT_RISK_MISMATCH": "Limite de crédit élevée pour un client à risque élevé",
        "PAYMENT_TERMS_INCONSISTENCY": (
            "Les conditions '{terms}' ne correspondent pas à {days} jours de paiement"
        ),
        "PRIORITY_HISTORY_MISMATCH": (
            "Client prioritaire avec un historique de commandes faible"
        ),
    },
}


class ValidationIssue(BaseModel):
    """A single problem found in a payload, addressed by dotted field path"""

    field: str
    code: str
    message: str
    severity: IssueSeverity = IssueSeverity.error


class ValidationResult(BaseModel):
    is_valid: bool = True
    errors: List[ValidationIssue] = Field(default_factory=list)
    warnings: List[ValidationIssue] = Field(default_factory=list)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        errors = self.errors + other.errors
        return ValidationResult(
            is_valid=not errors,
            errors=errors,
            warnings=self.warnings + other.warnings,
        )

    def first_error_message(self) -> Optional[str]:
        return self.errors[0].message if self.errors else None


class ValidationOptions(BaseModel):
    check_formats: bool = True
    check_uniqueness: bool = True
    exclude_client_id: Optional[UUID] = None
    partial: bool = False
    locale: str = "en"


class _IssueCollector:
    def __init__(self, locale: str):
        self.messages = MESSAGES.get(locale, MESSAGES["en"])
        self.errors: List[ValidationIssue] = []
        self.warnings: List[ValidationIssue] = []

    def _issue(self, field: str, code: str, severity: IssueSeverity, params) -> ValidationIssue:
        params.setdefault("label", field.rsplit(".", 1)[-1].replace("_", " "))
        message = self.messages[code].format(**params)
        return ValidationIssue(field=field, code=code, message=message, severity=severity)

    def error(self, field: str, code: str, **params):
        self.errors.append(self._issue(field, code, IssueSeverity.error, params))

    def warning(self, field: str, code: str, **params):
        self.warnings.append(self._issue(field, code, IssueSeverity.warning, params))

    def result(self) -> ValidationResult:
        return ValidationResult(
            is_valid=not self.errors, errors=self.errors, warnings=self.warnings
        )


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _enum_values(enum_cls) -> Set[str]:
    return {member.value for member in enum_cls}


def _is_member(value: Any, enum_cls) -> bool:
    """Membership test that tolerates lists and dicts from raw JSON payloads"""
    return isinstance(value, str) and value in _enum_values(enum_cls)


def _get(data: Any, key: str) -> Any:
    if isinstance(data, Mapping):
        return data.get(key)
    return getattr(data, key, None)


def _walk_strings(value: Any, path: str) -> Iterable:
    if isinstance(value, str):
        yield path, value
    elif isinstance(value, Mapping):
        for key, item in value.items():
            yield from _walk_strings(item, f"{path}.{key}" if path else str(key))
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            yield from _walk_strings(item, f"{path}[{index}]")


def _age_on(birth: date, today: date) -> int:
    years = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        years -= 1
    return years


def _parse_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def registration_number_of(business_info: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Registration number used for uniqueness, if the business carries one"""
    if not business_info:
        return None
    value = business_info.get("registration_number")
    if _is_blank(value) or not isinstance(value, str):
        return None
    return value.strip()


class ClientValidationService:
    """
    Validation engine for client payloads.

    Checks:
    1. Structure: required fields per client_type, formats, enums, lengths
    2. Uniqueness: email and registration number among live clients
    3. Business rules: cross-field heuristics, warnings only
    4. Update constraints: status state machine, credit limit vs balance,
       client type consistency
    """

    def __init__(self, uow: UnitOfWork, locale: str = "en"):
        self.uow = uow
        self.locale = locale

    async def validate_client_data(
        self,
        data: Mapping[str, Any],
        options: Optional[ValidationOptions] = None,
    ) -> ValidationResult:
        """
        Validate a full (or, with ``options.partial``, partial) client payload.

        Uniqueness is checked only when the structure is valid and
        ``options.check_uniqueness`` is set.
        """
        options = options or ValidationOptions()
        issues = _IssueCollector(options.locale)

        if not isinstance(data, Mapping):
            issues.error("data", "INVALID_FORMAT", label="client data")
            return issues.result()

        client_type = self._check_client_type(data, issues, options)
        self._check_type_specific(data, client_type, issues, options)
        self._check_contact_info(data.get("contact_info"), issues, options)
        self._check_commercial_info(data.get("commercial_info"), issues, options)
        self._check_tags(data.get("tags"), issues)
        self._check_text_lengths(data, issues)

        result = issues.result()
        if result.is_valid and options.check_uniqueness:
            result = result.merge(
                await self.check_unique_constraints(
                    data, options.exclude_client_id, locale=options.locale
                )
            )
        return result

    async def validate_update_data(
        self,
        client_id: UUID,
        data: Mapping[str, Any],
        options: Optional[ValidationOptions] = None,
    ) -> ValidationResult:
        """Validate only the sections present in an update payload"""
        options = (options or ValidationOptions()).model_copy(
            update={"partial": True, "exclude_client_id": client_id}
        )
        return await self.validate_client_data(data, options)

    def validate_business_rules(self, data: Mapping[str, Any]) -> ValidationResult:
        """Cross-field heuristics. Produces warnings only."""
        issues = _IssueCollector(self.locale)
        commercial = data.get("commercial_info") or {}
        history = data.get("commercial_history") or {}
        if not isinstance(commercial, Mapping):
            return issues.result()

        credit_limit = commercial.get("credit_limit")
        if (
            _is_number(credit_limit)
            and credit_limit >= CREDIT_RISK_THRESHOLD
            and commercial.get("risk_level") == RiskLevel.high.value
        ):
            issues.warning("commercial_info.risk_level", "CREDIT_RISK_MISMATCH")

        terms = commercial.get("payment_terms")
        days = commercial.get("payment_terms_days")
        if _is_member(terms, PaymentTerms) and _is_number(days):
            expected = PAYMENT_TERMS_DAYS.get(PaymentTerms(terms))
            if expected is not None and expected != days:
                issues.warning(
                    "commercial_info.payment_terms",
                    "PAYMENT_TERMS_INCONSISTENCY",
                    terms=terms,
                    days=days,
                )

        if commercial.get("priority") == ClientPriority.high.value:
            total = history.get("total_orders_amount", 0) if isinstance(history, Mapping) else 0
            if not _is_number(total) or total < LOW_ORDER_HISTORY_THRESHOLD:
                issues.warning("commercial_info.priority", "PRIORITY_HISTORY_MISMATCH")

        return issues.result()

    def validate_contacts(self, contacts: Any) -> ValidationResult:
        """Contact list of a business client: names, formats, primary flag"""
        issues = _IssueCollector(self.locale)
        self._check_contacts(contacts, issues)
        return issues.result()

    async def check_unique_constraints(
        self,
        data: Mapping[str, Any],
        exclude_client_id: Optional[UUID] = None,
        locale: Optional[str] = None,
    ) -> ValidationResult:
        """Look for live clients already holding this email or registration number"""
        issues = _IssueCollector(locale or self.locale)

        contact_info = data.get("contact_info") or {}
        email = contact_info.get("email") if isinstance(contact_info, Mapping) else None
        if isinstance(email, str) and email.strip():
            matches = await self.uow.clients.find_by_email(email)
            if any(client.id != exclude_client_id for client in matches):
                issues.error("contact_info.email", "DUPLICATE_VALUE", label="Email address")

        business_info = data.get("business_info")
        registration_number = (
            registration_number_of(business_info) if isinstance(business_info, Mapping) else None
        )
        if registration_number:
            matches = await self.uow.clients.find_by_registration_number(registration_number)
            if any(client.id != exclude_client_id for client in matches):
                issues.error(
                    "business_info.registration_number",
                    "DUPLICATE_VALUE",
                    label="Registration number",
                )

        return issues.result()

    def validate_update_constraints(
        self,
        current_status: Union[ClientStatus, str],
        update_data: Mapping[str, Any],
        current_record: Optional[Union[Client, Mapping[str, Any]]] = None,
    ) -> ValidationResult:
        """
        Check an update against the current state of the record.

        - status must follow the transition table; same-status is a no-op
        - a lowered credit limit must stay above the current balance
        - type-specific info must match the record's client_type
        """
        issues = _IssueCollector(self.locale)
        current = ClientStatus(current_status)

        target = update_data.get("status")
        if target is not None:
            if not _is_member(target, ClientStatus):
                issues.error("status", "INVALID_ENUM_VALUE", value=target)
            else:
                target = ClientStatus(target)
                if target != current or target == ClientStatus.deleted:
                    if target not in ALLOWED_STATUS_TRANSITIONS.get(current, set()):
                        issues.error(
                            "status",
                            "INVALID_STATUS_TRANSITION",
                            current=current.value,
                            target=target.value,
                        )

        if current_record is not None:
            commercial = update_data.get("commercial_info")
            credit_limit = _get(commercial, "credit_limit") if commercial else None
            history = _get(current_record, "commercial_history") or {}
            balance = _get(history, "current_balance")
            if _is_number(credit_limit) and _is_number(balance) and credit_limit < balance:
                issues.error(
                    "commercial_info.credit_limit",
                    "CREDIT_LIMIT_BELOW_BALANCE",
                    credit_limit=credit_limit,
                    balance=balance,
                )

            record_type = _get(current_record, "client_type")
            record_type = record_type.value if isinstance(record_type, ClientType) else record_type
            foreign_section = {
                ClientType.individual.value: "business_info",
                ClientType.business.value: "individual_info",
            }.get(record_type)
            if foreign_section and update_data.get(foreign_section) is not None:
                issues.error(
                    foreign_section,
                    "CLIENT_TYPE_MISMATCH",
                    label=foreign_section,
                    client_type=record_type,
                )

        return issues.result()

    # ------------------------------------------------------------------
    # Structural checks
    # ------------------------------------------------------------------

    def _check_client_type(self, data, issues: _IssueCollector, options) -> Optional[str]:
        client_type = data.get("client_type")
        if client_type is None:
            if not options.partial:
                issues.error("client_type", "REQUIRED_FIELD", label="Client type")
            return None
        if not _is_member(client_type, ClientType):
            issues.error("client_type", "INVALID_ENUM_VALUE", value=client_type)
            return None
        return client_type

    def _check_type_specific(self, data, client_type, issues: _IssueCollector, options):
        partial = options.partial
        individual = data.get("individual_info")
        business = data.get("business_info")

        if client_type == ClientType.individual.value:
            if business is not None:
                issues.error(
                    "business_info",
                    "CLIENT_TYPE_MISMATCH",
                    label="business_info",
                    client_type=client_type,
                )
            if individual is None and not partial:
                issues.error("individual_info", "REQUIRED_FIELD", label="Individual information")
        elif client_type == ClientType.business.value:
            if individual is not None:
                issues.error(
                    "individual_info",
                    "CLIENT_TYPE_MISMATCH",
                    label="individual_info",
                    client_type=client_type,
                )
            if business is None and not partial:
                issues.error("business_info", "REQUIRED_FIELD", label="Business information")

        if individual is not None and client_type != ClientType.business.value:
            self._check_individual_info(individual, issues, partial)
        if business is not None and client_type != ClientType.individual.value:
            self._check_business_info(business, issues, options)

    def _check_individual_info(self, info, issues: _IssueCollector, partial: bool):
        if not isinstance(info, Mapping):
            issues.error("individual_info", "INVALID_FORMAT", label="individual information")
            return

        for key, label in (("first_name", "First name"), ("last_name", "Last name")):
            field = f"individual_info.{key}"
            value = info.get(key)
            if _is_blank(value):
                if not partial or key in info:
                    issues.error(field, "REQUIRED_FIELD", label=label)
            elif isinstance(value, str) and len(value) > MAX_PERSON_NAME_LENGTH:
                issues.error(field, "MAX_LENGTH", label=label, max=MAX_PERSON_NAME_LENGTH)

        if info.get("date_of_birth"):
            field = "individual_info.date_of_birth"
            birth = _parse_date(info["date_of_birth"])
            if birth is None:
                issues.error(field, "INVALID_FORMAT", label="date of birth")
            else:
                age = _age_on(birth, date.today())
                if age > MAX_AGE or age < 0:
                    issues.error(field, "INVALID_DATE")
                elif age < MIN_AGE:
                    issues.warning(field, "AGE_WARNING", min_age=MIN_AGE)

    def _check_business_info(self, info, issues: _IssueCollector, options):
        if not isinstance(info, Mapping):
            issues.error("business_info", "INVALID_FORMAT", label="business information")
            return

        name = info.get("company_name")
        if _is_blank(name):
            if not options.partial or "company_name" in info:
                issues.error("business_info.company_name", "REQUIRED_FIELD", label="Company name")
        elif isinstance(name, str) and len(name) > MAX_COMPANY_NAME_LENGTH:
            issues.error(
                "business_info.company_name",
                "MAX_LENGTH",
                label="Company name",
                max=MAX_COMPANY_NAME_LENGTH,
            )

        industry = info.get("industry")
        if industry is not None and not _is_member(industry, Industry):
            issues.error("business_info.industry", "INVALID_ENUM_VALUE", value=industry)

        contacts = info.get("contacts")
        if contacts is not None:
            self._check_contacts(contacts, issues)

        legal_info = info.get("legal_info")
        if isinstance(legal_info, Mapping) and options.check_formats:
            siret = legal_info.get("siret")
            if siret and not SIRET_PATTERN.match(str(siret)):
                issues.error("business_info.legal_info.siret", "INVALID_FORMAT", label="SIRET")
            vat_number = legal_info.get("vat_number")
            if vat_number and not VAT_PATTERN.match(str(vat_number)):
                issues.warning("business_info.legal_info.vat_number", "VAT_FORMAT_WARNING")

    def _check_contacts(self, contacts, issues: _IssueCollector):
        field = "business_info.contacts"
        if not isinstance(contacts, list) or not contacts:
            issues.error(field, "REQUIRED_FIELD", label="Contact")
            return

        primaries = 0
        for index, contact in enumerate(contacts):
            prefix = f"{field}[{index}]"
            if not isinstance(contact, Mapping):
                issues.error(prefix, "INVALID_FORMAT", label="contact")
                continue
            if contact.get("is_primary"):
                primaries += 1
            for key, label in (("first_name", "Contact first name"), ("last_name", "Contact last name")):
                if _is_blank(contact.get(key)):
                    issues.error(f"{prefix}.{key}", "REQUIRED_FIELD", label=label)
            contact_type = contact.get("contact_type")
            if contact_type is not None and not _is_member(contact_type, ContactType):
                issues.error(f"{prefix}.contact_type", "INVALID_ENUM_VALUE", value=contact_type)
            email = contact.get("email")
            if email and not self._is_valid_email(email):
                issues.error(f"{prefix}.email", "INVALID_FORMAT", label="email")

        if primaries == 0:
            issues.error(field, "PRIMARY_CONTACT_REQUIRED")
        elif primaries > 1:
            issues.warning(field, "MULTIPLE_PRIMARY_CONTACTS")

    def _check_contact_info(self, contact_info, issues: _IssueCollector, options):
        if contact_info is None:
            if not options.partial:
                issues.error("contact_info.email", "REQUIRED_FIELD", label="Email address")
            return
        if not isinstance(contact_info, Mapping):
            issues.error("contact_info", "INVALID_FORMAT", label="contact information")
            return

        email = contact_info.get("email")
        if _is_blank(email):
            if not options.partial or "email" in contact_info:
                issues.error("contact_info.email", "REQUIRED_FIELD", label="Email address")
        elif options.check_formats and not self._is_valid_email(email):
            issues.error("contact_info.email", "INVALID_FORMAT", label="email")

        if options.check_formats:
            for key in ("phone", "mobile"):
                phone = contact_info.get(key)
                if phone and not self._is_valid_phone(phone):
                    issues.error(f"contact_info.{key}", "INVALID_FORMAT", label=key)

        address = contact_info.get("address")
        if address is not None:
            self._check_address(address, issues, options)

    def _check_address(self, address, issues: _IssueCollector, options):
        if not isinstance(address, Mapping):
            issues.error("contact_info.address", "INVALID_FORMAT", label="address")
            return

        country = address.get("country")
        if _is_blank(country):
            issues.error("contact_info.address.country", "REQUIRED_FIELD", label="Country")
            return

        postal_code = address.get("postal_code")
        if postal_code and options.check_formats:
            pattern = POSTAL_CODE_PATTERNS.get(str(country).strip().upper())
            if pattern is not None and not pattern.match(str(postal_code).strip()):
                issues.error(
                    "contact_info.address.postal_code", "INVALID_FORMAT", label="postal code"
                )

    def _check_commercial_info(self, commercial, issues: _IssueCollector, options):
        if commercial is None:
            return
        if not isinstance(commercial, Mapping):
            issues.error("commercial_info", "INVALID_FORMAT", label="commercial information")
            return

        credit_limit = commercial.get("credit_limit")
        if credit_limit is not None:
            if not _is_number(credit_limit) or credit_limit < 0:
                issues.error("commercial_info.credit_limit", "INVALID_VALUE", label="Credit limit")
            elif credit_limit > HIGH_CREDIT_LIMIT_THRESHOLD:
                issues.warning("commercial_info.credit_limit", "HIGH_CREDIT_LIMIT")

        days = commercial.get("payment_terms_days")
        if days is not None:
            if not _is_number(days) or days < 0:
                issues.error(
                    "commercial_info.payment_terms_days", "INVALID_VALUE", label="Payment terms"
                )
            elif days > LONG_PAYMENT_TERMS_DAYS:
                issues.warning("commercial_info.payment_terms_days", "LONG_PAYMENT_TERMS")

        currency = commercial.get("credit_limit_currency")
        if currency is not None and options.check_formats:
            if not isinstance(currency, str) or not CURRENCY_PATTERN.match(currency):
                issues.error(
                    "commercial_info.credit_limit_currency", "INVALID_FORMAT", label="currency"
                )

        for key, enum_cls in (
            ("priority", ClientPriority),
            ("risk_level", RiskLevel),
            ("payment_terms", PaymentTerms),
            ("preferred_language", LanguageCode),
        ):
            value = commercial.get(key)
            if value is not None and not _is_member(value, enum_cls):
                issues.error(f"commercial_info.{key}", "INVALID_ENUM_VALUE", value=value)

        methods = commercial.get("payment_methods")
        if methods is not None:
            if not isinstance(methods, list):
                issues.error(
                    "commercial_info.payment_methods", "INVALID_FORMAT", label="payment methods"
                )
            else:
                for index, method in enumerate(methods):
                    if not _is_member(method, PaymentMethod):
                        issues.error(
                            f"commercial_info.payment_methods[{index}]",
                            "INVALID_ENUM_VALUE",
                            value=method,
                        )

    def _check_tags(self, tags, issues: _IssueCollector):
        if tags is None:
            return
        if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
            issues.error("tags", "INVALID_FORMAT", label="tags")
        elif len(tags) > MAX_TAGS:
            issues.warning("tags", "TOO_MANY_TAGS", max=MAX_TAGS)

    def _check_text_lengths(self, data, issues: _IssueCollector):
        for path, value in _walk_strings(data, ""):
            if len(value) > MAX_TEXT_LENGTH:
                issues.error(path, "TEXT_TOO_LONG", max=MAX_TEXT_LENGTH)

    @staticmethod
    def _is_valid_email(email: Any) -> bool:
        if not isinstance(email, str):
            return False
        try:
            validate_email(email.strip(), check_deliverability=False)
        except EmailNotValidError:
            return False
        return True

    @staticmethod
    def _is_valid_phone(phone: Any) -> bool:
        if not isinstance(phone, str) or not PHONE_PATTERN.match(phone.strip()):
            return False
        digits = sum(ch.isdigit() for ch in phone)
        return PHONE_MIN_DIGITS <= digits <= PHONE_MAX_DIGITS
