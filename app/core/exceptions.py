"""
Error taxonomy for the billing and time-period core.
"""


class PSAError(Exception):
    """Base class for errors raised by the billing and time-period core."""


class ConfigurationError(PSAError):
    """Tenant configuration cannot be used as given (fatal, never retried)."""


class NoActivePlanError(PSAError):
    """The company has no active billing plan overlapping the billing period."""

    def __init__(self, company_id, period=None):
        self.company_id = company_id
        self.period = period
        message = f"No active billing plans found for company {company_id}"
        if period is not None:
            message += f" in period {period.start_date} - {period.end_date}"
        super().__init__(message)


class DataIntegrityError(PSAError):
    """A row referenced by billing data is missing or malformed."""


class RolloverError(PSAError):
    """Rolling unapproved time entries forward failed; no entry was moved."""

    def __init__(self, company_id, entry_id, message):
        self.company_id = company_id
        self.entry_id = entry_id
        super().__init__(
            f"Rollover for company {company_id} failed on time entry {entry_id}: {message}"
        )
