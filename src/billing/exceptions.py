"""Errors raised by the billing engine and the credit workflow.

Every error derives from ``ValueError`` so callers that already turn
``ValueError`` into a 400 response keep working; the API layer inspects
``code`` and the extra attributes to render the deadline cases distinctly.
"""


class BillingError(ValueError):
    code = "billing_error"


class InvalidPeriod(BillingError):
    code = "invalid_period"

    def __init__(self, value):
        self.value = value
        super().__init__(f"Ogiltig period: {value!r}. Förväntat format är ÅÅÅÅ-MM.")


class DeadlinePassed(BillingError):
    """A new credit request was submitted after the organization's deadline."""

    code = "deadline_passed"

    def __init__(self, *, days_since_sent: int, deadline_days: int, can_override: bool = False):
        self.days_since_sent = days_since_sent
        self.deadline_days = deadline_days
        self.can_override = can_override
        super().__init__(
            f"Kreditfristen har gått ut: leadet skickades för {days_since_sent} dagar sedan "
            f"och fristen är {deadline_days} dagar ({self.days_overdue} dagar för sent)."
        )

    @property
    def days_overdue(self) -> int:
        return self.days_since_sent - self.deadline_days


class ConfirmationRequired(BillingError):
    """The lead is old enough that the request must be explicitly confirmed."""

    code = "confirmation_required"

    def __init__(self, *, days_since_sent: int, threshold_days: int):
        self.days_since_sent = days_since_sent
        self.threshold_days = threshold_days
        super().__init__(
            f"Leadet skickades för {days_since_sent} dagar sedan (mer än {threshold_days} dagar). "
            "Bekräfta att kreditförfrågan ska skickas ändå."
        )


class CreditsNotAllowed(BillingError):
    code = "credits_not_allowed"

    def __init__(self, organization_name: str):
        super().__init__(
            f"{organization_name} har inte rätt att kreditera leads enligt partneravtalet."
        )


class InvalidCreditTransition(BillingError):
    code = "invalid_transition"

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(
            f"Kreditförfrågan är redan hanterad ({current}) och kan inte ändras till {target}."
        )


class UnknownOrganization(BillingError):
    code = "unknown_organization"

    def __init__(self, organization_id):
        self.organization_id = organization_id
        super().__init__(f"Organisationen {organization_id} finns inte.")


class InvalidPipelineTransition(BillingError):
    code = "invalid_transition"

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(
            f"Affären är redan stängd ({current}) och kan inte flyttas till {target}."
        )
