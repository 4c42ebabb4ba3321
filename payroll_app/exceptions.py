"""Error taxonomy raised by the payroll services.

Routes never build error responses for these by hand; the handler
registered in ``create_app`` turns them into the JSON envelope.
"""


class PayrollError(Exception):
    status_code = 500

    def __init__(self, message, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self):
        payload = {'success': False, 'error': self.message}
        if self.context:
            payload['context'] = self.context
        return payload


class NotFound(PayrollError):
    """Referenced employee, department or salary record does not exist."""
    status_code = 404


class InvalidState(PayrollError):
    """Operation conflicts with the current state of the record."""
    status_code = 409


class ValidationFailure(PayrollError):
    """Rejected input, raised before anything is written."""
    status_code = 400

    def __init__(self, message, errors=None, **context):
        super().__init__(message, **context)
        self.errors = errors or {}

    def to_dict(self):
        payload = super().to_dict()
        if self.errors:
            payload['errors'] = self.errors
        return payload
