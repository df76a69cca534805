from enum import Enum


class FeeStatus(str, Enum):
    pending = "pending"
    partial = "partial"
    paid = "paid"


class ApplicationStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class HostelRegistrationStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class TicketStatus(str, Enum):
    PENDING = "Pending"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


class TicketCategory(str, Enum):
    ACADEMIC = "academic"
    FINANCIAL = "financial"
    VISA = "visa"
    TECHNICAL = "technical"
    HOUSING = "housing"
    OTHER = "other"


class FinanceTab(str, Enum):
    OVERVIEW = "overview"
    PAYMENT_HISTORY = "payment-history"
    FEE_STRUCTURE = "fee-structure"


class VisaTab(str, Enum):
    OVERVIEW = "overview"
    DEADLINES = "deadlines"
    DOCUMENTS = "documents"


class SupportTab(str, Enum):
    SUBMIT_QUERY = "submit-query"
    FAQS = "faqs"
    PREVIOUS_TICKETS = "previous-tickets"


class TimelineStatus(str, Enum):
    COMPLETED = "completed"
    UPCOMING = "upcoming"
