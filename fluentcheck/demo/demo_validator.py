"""Demo Validator — one Person validator exercising every kind of rule the engine supports.

Sections:
    1. Basic built-in checks
    2. Conditions
    3. Custom checks
    4. Rule sets
    5. Collections
    6. Dependent rules
    7. Inheritance (polymorphic) validation
    8. Localisation
    9. Advanced: root context data, pre-validation, custom exceptions
"""

from fluentcheck.demo.contact_validators import ContactPersonValidator, OrganisationValidator
from fluentcheck.demo.custom_language_manager import CustomLanguageManager
from fluentcheck.demo.custom_validators import list_must_contain_fewer_than
from fluentcheck.demo.list_count_check import ListCountCheck
from fluentcheck.demo.order_validator import OrderValidator
from fluentcheck.models import ContactPerson, Organisation, Person
from fluentcheck.validators import (
    AbstractValidator,
    ApplyConditionTo,
    CascadeMode,
    ValidationContext,
    ValidationException,
    ValidationFailure,
    ValidationResult,
    global_options,
)

PHOTO_URL_PATTERN = r"https://www.photos.io/\d+\.png"


class DemoValidator(AbstractValidator):

    validated_type = Person

    def __init__(self):
        super().__init__()
        self._basic_rules()
        self._conditional_rules()
        self._custom_rules()
        self._rule_sets()
        self._collection_rules()
        self._dependent_rules()
        self._inheritance_rules()
        self._localisation_rules()
        self._advanced_rules()

    # ── 1. Basic built-in checks ──

    def _basic_rules(self) -> None:
        self.rule_for("surname").not_null().with_message("Surname cannot be null.")
        self.rule_for("forename").not_empty().with_message("Forename cannot be empty.")
        self.rule_for("password").equal(lambda p: p.password_confirmation).with_message("Passwords must match.")
        self.rule_for("postcode").length(5, 10).with_message("Postcode must be between 5 and 10 characters.")
        self.rule_for("id").not_equal(0).with_message("Id must not be 0.")

    # ── 2. Conditions ──

    def _conditional_rules(self) -> None:
        # when: the rule runs only if the condition holds
        (self.rule_for("customer_discount")
            .greater_than(0)
            .when(lambda p: p.is_preferred_customer)
            .with_message("Preferred customers must have a discount greater than 0."))

        # unless: the rule runs only if the condition does not hold
        (self.rule_for("customer_discount")
            .greater_than(0)
            .unless(lambda p: not p.is_preferred_customer)
            .with_message("Preferred customers must have a discount greater than 0."))

        # Top-level when: one condition for several rules
        def preferred_rules():
            self.rule_for("customer_discount").greater_than(0).with_message("Preferred customers need a positive discount.")
            self.rule_for("credit_card_number").not_null().with_message("Preferred customers need a credit card.")

        self.when(lambda p: p.is_preferred, preferred_rules)

        # otherwise: rules for when the condition is false
        def non_preferred_rules():
            self.rule_for("customer_discount").equal(0).with_message("Non-preferred customers must have zero discount.")

        self.when(
            lambda p: p.is_preferred,
            lambda: self.rule_for("customer_discount").greater_than(0),
        ).otherwise(non_preferred_rules)

        # CURRENT_VALIDATOR: each condition gates only the check just before it
        (self.rule_for("photo")
            .not_empty()
            .matches(PHOTO_URL_PATTERN)
            .when(lambda p: p.is_preferred_customer, ApplyConditionTo.CURRENT_VALIDATOR)
            .with_message("Photo must be a valid URL for preferred customers.")
            .empty()
            .when(lambda p: not p.is_preferred_customer, ApplyConditionTo.CURRENT_VALIDATOR)
            .with_message("Photo must be empty for non-preferred customers."))

    # ── 3. Custom checks ──

    def _custom_rules(self) -> None:
        # Predicate
        self.rule_for("pets").must(lambda pets: len(pets) < 10).with_message("Pets list must contain fewer than 10 items.")

        # Free-form action adding failures itself
        def check_pet_count(pets, context: ValidationContext) -> None:
            if len(pets) > 10:
                context.add_failure("Pets list must contain 10 items or fewer.")

        self.rule_for("pets").custom(check_pet_count)

        # Reusable extension function
        list_must_contain_fewer_than(self.rule_for("pets"), 10)

        # Reusable class-based check
        self.rule_for("pets").set_validator(ListCountCheck(10))

    # ── 4. Rule sets ──

    def _rule_sets(self) -> None:
        def name_rules():
            self.rule_for("surname").not_null().with_message("Surname is required in Names RuleSet.")
            self.rule_for("forename").not_null().with_message("Forename is required in Names RuleSet.")

        self.rule_set("Names", name_rules)

    # ── 5. Collections ──

    def _collection_rules(self) -> None:
        # Each element of a list of simple values
        self.rule_for_each("address_lines").not_null().with_message("Address line cannot be null.")

        # Element index in the message
        self.rule_for_each("address_lines").not_null().with_message("Address {CollectionIndex} is required.")

        # Each element through a child validator
        self.rule_for_each("orders").set_validator(OrderValidator())

        # Inline child rules
        self.rule_for_each("orders").child_rules(
            lambda order: order.rule_for("total").greater_than(0).with_message("Order total must be positive.")
        )

        # Only elements matching a filter
        self.rule_for_each("orders").where(lambda order: order.cost is not None).set_validator(OrderValidator())

        # Whole-collection check followed by per-element checks
        (self.rule_for("orders")
            .cascade(CascadeMode.CONTINUE)
            .must(lambda orders: len(orders) <= 10)
            .with_message("No more than 10 orders are allowed.")
            .for_each(lambda order_rule: order_rule
                .must(lambda order: order.total > 0)
                .with_message("Orders must have a total greater than 0.")))

    # ── 6. Dependent rules ──

    def _dependent_rules(self) -> None:
        (self.rule_for("surname")
            .not_null()
            .dependent_rules(lambda: self.rule_for("forename")
                .not_null()
                .with_message("Forename is required if Surname is provided.")))

    # ── 7. Inheritance validation ──

    def _inheritance_rules(self) -> None:
        # Single property, validators built up front
        self.rule_for("contact").set_inheritance_validator(lambda v: v
            .add(Organisation, OrganisationValidator())
            .add(ContactPerson, ContactPersonValidator()))

        # Each element of a collection
        self.rule_for_each("contacts").set_inheritance_validator(lambda v: v
            .add(Organisation, OrganisationValidator())
            .add(ContactPerson, ContactPersonValidator()))

        # Lazy: a validator is built only when a value of its type turns up
        self.rule_for("contact").set_inheritance_validator(lambda v: v
            .add(Organisation, lambda: OrganisationValidator())
            .add(ContactPerson, lambda: ContactPersonValidator()))

    # ── 8. Localisation ──

    def _localisation_rules(self) -> None:
        # Message computed from the instance at failure time
        self.rule_for("surname").not_null().with_message(lambda person: "Surname is required (localized).")

        # Default messages from a custom catalog
        global_options.set_language_manager(CustomLanguageManager())

    # ── 9. Advanced ──

    def _advanced_rules(self) -> None:
        # Root context data passed to validate()
        def flag_custom_data(surname, context: ValidationContext) -> None:
            if "MyCustomData" in context.root_context_data:
                context.add_failure("Custom data detected, adding failure for demo.")

        self.rule_for("surname").custom(flag_custom_data)

    def pre_validate(self, context: ValidationContext, result: ValidationResult) -> bool:
        if context.instance_to_validate is None:
            result.errors.append(ValidationFailure(property_name="", error_message="Please ensure a model was supplied."))
            return False
        return True

    def raise_validation_exception(self, context: ValidationContext, result: ValidationResult) -> None:
        ex = ValidationException(result.errors)
        raise ValueError(f"Custom validation exception: {ex.message}") from ex
