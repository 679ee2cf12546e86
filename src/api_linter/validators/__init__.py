"""Validator registry, in execution order."""

from api_linter.registry import CommonFieldRegistry
from api_linter.validators.base import Validator
from api_linter.validators.common_fields import CommonFieldsValidator
from api_linter.validators.components import ComponentsValidator
from api_linter.validators.descriptions import DescriptionsValidator
from api_linter.validators.error_responses import ErrorResponsesValidator
from api_linter.validators.examples import ExamplesValidator
from api_linter.validators.http_methods import HttpMethodsValidator
from api_linter.validators.path_parameters import PathParametersValidator
from api_linter.validators.required_fields import RequiredFieldsValidator
from api_linter.validators.response_schemas import ResponseSchemasValidator
from api_linter.validators.security import SecurityValidator
from api_linter.validators.versioning import VersioningValidator


def build_validators(registry: CommonFieldRegistry) -> dict[str, Validator]:
    """Every validator keyed by name; dict order is the execution order."""
    validators = [
        DescriptionsValidator(),
        CommonFieldsValidator(registry),
        ErrorResponsesValidator(),
        ComponentsValidator(),
        SecurityValidator(),
        VersioningValidator(),
        ResponseSchemasValidator(),
        PathParametersValidator(),
        RequiredFieldsValidator(),
        HttpMethodsValidator(),
        ExamplesValidator(),
    ]
    return {v.name: v for v in validators}


VALIDATOR_NAMES = list(build_validators(CommonFieldRegistry.empty()))
