"""Tests for error classification and typed errors."""

import pytest

from rauk_inventory import (
    RaukApiError,
    RaukAuthenticationError,
    RaukError,
    RaukNetworkError,
    RaukValidationError,
    ValidationErrorDetail,
    is_api_error,
    is_authentication_error,
    is_network_error,
    is_rauk_error,
    is_validation_error,
    parse_api_error,
)

VALIDATION_BODY = {
    "success": False,
    "error": {
        "name": "ValidationError",
        "errors": [
            {
                "property": "brandDetails",
                "constraints": ["brandDetails must be an object"],
                "children": [],
            },
            {
                "property": "factoryDetails",
                "constraints": ["factoryDetails must be an object"],
                "children": [],
            },
        ],
    },
}

NESTED_BODY = {
    "success": False,
    "error": {
        "name": "ValidationError",
        "message": "Invalid item",
        "errors": [
            {
                "property": "color",
                "constraints": ["color is invalid"],
                "children": [
                    {"property": "name", "constraints": ["name must be a string"], "children": []},
                    {
                        "property": "details",
                        "constraints": [],
                        "children": [
                            {"property": "name", "constraints": ["name is too long"], "children": []},
                        ],
                    },
                ],
            },
            {"property": "name", "constraints": ["name is required"], "children": []},
        ],
    },
}


class TestParseApiError:
    """Tests for parse_api_error."""

    def test_validation_error(self):
        """Structured field errors produce a validation error."""
        error = parse_api_error(400, VALIDATION_BODY)

        assert isinstance(error, RaukValidationError)
        assert error.status_code == 400
        assert error.message == "brandDetails must be an object; factoryDetails must be an object"
        assert error.get_all_messages() == [
            "brandDetails must be an object",
            "factoryDetails must be an object",
        ]
        assert len(error.get_errors_for_property("brandDetails")) == 1
        assert error.original_error is VALIDATION_BODY

    def test_validation_message_from_body(self):
        error = parse_api_error(422, NESTED_BODY)
        assert error.message == "Invalid item"

    def test_validation_wins_over_status(self):
        """Validation errors are detected even on 401 or 500 responses."""
        assert isinstance(parse_api_error(401, VALIDATION_BODY), RaukValidationError)
        assert isinstance(parse_api_error(500, VALIDATION_BODY), RaukValidationError)

    @pytest.mark.parametrize("status", [401, 403])
    def test_authentication_error(self, status):
        body = {"success": False, "error": {"name": "Unauthorized", "message": "Bad signature"}}
        error = parse_api_error(status, body)

        assert isinstance(error, RaukAuthenticationError)
        assert error.message == "Bad signature"
        assert error.status_code == status

    def test_authentication_default_message(self):
        error = parse_api_error(401, {"success": False, "error": {"name": "Unauthorized"}})
        assert error.message == "Authentication failed"

    @pytest.mark.parametrize("status", [500, 502, 503])
    def test_server_error(self, status):
        error = parse_api_error(status, {"success": False, "error": {"name": "InternalError"}})

        assert isinstance(error, RaukNetworkError)
        assert error.message == "Server error occurred"

    def test_generic_api_error(self):
        error = parse_api_error(404, {"success": False, "error": {"name": "NotFound"}})

        assert isinstance(error, RaukApiError)
        assert error.message == "API request failed with status 404"

    def test_generic_api_error_message(self):
        body = {"success": False, "error": {"name": "Conflict", "message": "Duplicate sku"}}
        assert parse_api_error(409, body).message == "Duplicate sku"

    def test_errors_not_a_list(self):
        """A non-list errors field is not treated as validation."""
        body = {"success": False, "error": {"name": "BadRequest", "errors": "oops"}}
        assert isinstance(parse_api_error(400, body), RaukApiError)

    def test_non_mapping_body(self):
        error = parse_api_error(400, ["unexpected"])

        assert isinstance(error, RaukApiError)
        assert error.original_error == ["unexpected"]

    def test_malformed_validation_entries(self):
        """String constraints and non-object children do not break classification."""
        body = {
            "success": False,
            "error": {
                "name": "ValidationError",
                "errors": [
                    {"property": "sku", "constraints": "sku is required", "children": ["bad"]},
                ],
            },
        }
        error = parse_api_error(400, body)

        assert isinstance(error, RaukValidationError)
        assert error.message == "sku is required"
        assert error.validation_errors[0].children == []

    def test_timestamp_set(self):
        error = parse_api_error(400, {"error": {}})
        assert error.timestamp.endswith("Z")


class TestValidationError:
    """Tests for RaukValidationError helpers."""

    def test_all_messages_depth_first(self):
        error = parse_api_error(400, NESTED_BODY)
        assert error.get_all_messages() == [
            "color is invalid",
            "name must be a string",
            "name is too long",
            "name is required",
        ]

    def test_errors_for_nested_property(self):
        """Matches are found at every depth."""
        error = parse_api_error(400, NESTED_BODY)
        matches = error.get_errors_for_property("name")

        assert [m.constraints for m in matches] == [
            ["name is required"],
            ["name must be a string"],
            ["name is too long"],
        ]

    def test_errors_for_unknown_property(self):
        error = parse_api_error(400, NESTED_BODY)
        assert error.get_errors_for_property("sku") == []

    def test_to_dict(self):
        error = RaukValidationError(
            "Invalid",
            [ValidationErrorDetail("sku", ["sku is required"])],
            status_code=400,
        )
        data = error.to_dict()

        assert data["name"] == "RaukValidationError"
        assert data["statusCode"] == 400
        assert data["validationErrors"][0]["property"] == "sku"


class TestPredicates:
    """Tests for the error type predicates."""

    def test_predicates(self):
        validation = RaukValidationError("x", [])
        auth = RaukAuthenticationError()
        network = RaukNetworkError()
        api = RaukApiError("x")
        generic = RaukError("x")

        assert all(is_rauk_error(e) for e in (validation, auth, network, api, generic))
        assert not is_rauk_error(ValueError("x"))
        assert is_validation_error(validation) and not is_validation_error(api)
        assert is_authentication_error(auth) and not is_authentication_error(network)
        assert is_network_error(network) and not is_network_error(generic)
        assert is_api_error(api) and not is_api_error(generic)

    def test_defaults(self):
        assert str(RaukAuthenticationError()) == "Authentication failed"
        assert str(RaukNetworkError()) == "Network request failed"
        assert RaukNetworkError().context is None

    def test_status_code_defaults_to_zero(self):
        assert RaukError("boom").status_code == 0
        assert RaukNetworkError().status_code == 0
        assert RaukError("boom").to_dict()["statusCode"] == 0
