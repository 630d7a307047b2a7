"""Order validator — used as a child validator for order collections."""

from fluentcheck.models import Order
from fluentcheck.validators import AbstractValidator


class OrderValidator(AbstractValidator):
    """Every order must have a positive total."""

    validated_type = Order

    def __init__(self):
        super().__init__()
        self.rule_for("total").greater_than(0)
