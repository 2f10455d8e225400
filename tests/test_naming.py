"""Tests for the naming module."""

from dashgen.naming import (
    Bucket,
    build_function_name,
    capitalize,
    classify,
    sanitize_identifier,
)


class TestBuildFunctionName:
    """Test function name generation from operationId or method + path."""

    def test_operation_id_with_resource_suffix(self):
        assert build_function_name("get", "/api/foo/{id}", "foo", "retrieveFoo") == "retrieveFooFoo"

    def test_list_widgets(self):
        assert build_function_name("get", "/api/widgets", "widgets", "listWidgets") == "listWidgetsWidgets"

    def test_fallback_uses_verb_and_last_segment(self):
        assert build_function_name("get", "/api/widgets/stats", "widgets") == "getStatsWidgets"

    def test_fallback_strips_param_braces(self):
        assert build_function_name("delete", "/api/widgets/{id}", "widgets") == "deleteIdWidgets"

    def test_fallback_collection_path(self):
        assert build_function_name("post", "/api/widgets", "widgets") == "postWidgetsWidgets"

    def test_operation_id_is_sanitized(self):
        assert build_function_name("get", "/api/widgets", "widgets", "list-all.widgets") == "listAllWidgetsWidgets"

    def test_resource_is_sanitized(self):
        name = build_function_name("get", "/api/user-profiles", "user-profiles", "listProfiles")
        assert name == "listProfilesUserProfiles"

    def test_valid_identifier(self):
        """Function names must be valid JS identifiers."""
        name = build_function_name("get", "/api/files/{base64-name}", "files")
        assert name.isidentifier()


class TestClassify:
    """Test bucket assignment by case-sensitive prefix."""

    def test_list(self):
        assert classify("listWidgetsWidgets") is Bucket.LIST

    def test_retrieve(self):
        assert classify("retrieveWidgetWidgets") is Bucket.RETRIEVE

    def test_create(self):
        assert classify("createWidgetsWidgets") is Bucket.CREATE

    def test_update(self):
        assert classify("updateWidgetWidgets") is Bucket.UPDATE

    def test_delete(self):
        assert classify("deleteWidgetWidgets") is Bucket.DELETE

    def test_destroy_is_delete(self):
        assert classify("destroyWidgetWidgets") is Bucket.DELETE

    def test_case_sensitive(self):
        assert classify("ListWidgets") is Bucket.UNCLASSIFIED

    def test_unclassified(self):
        assert classify("getStatsWidgets") is Bucket.UNCLASSIFIED
        assert classify("partialUpdateWidgets") is Bucket.UNCLASSIFIED

    def test_first_prefix_wins(self):
        """'listCreate...' starts with list, which is tested before create."""
        assert classify("listCreatedWidgets") is Bucket.LIST


class TestHelpers:
    def test_capitalize_keeps_rest(self):
        assert capitalize("widgetParts") == "WidgetParts"

    def test_capitalize_empty(self):
        assert capitalize("") == ""

    def test_sanitize_leading_digit(self):
        assert sanitize_identifier("2fa") == "_2fa"

    def test_sanitize_empty(self):
        assert sanitize_identifier("{}") == "_"
