import pytest

from api_doc_gen.generator.anchors import endpoint_anchor, find_collisions, schema_anchor, to_anchor


class TestToAnchor:
    @pytest.mark.parametrize("text", [None, "", "   ", "\t\n"])
    def test_blank_maps_to_unknown(self, text):
        assert to_anchor(text) == "unknown"

    def test_lowercase_spaces_and_dots(self):
        assert to_anchor("User Management v1.2") == "user-management-v1-2"

    def test_other_punctuation_untouched(self):
        assert to_anchor("A/B_(c)") == "a/b_(c)"

    def test_stable(self):
        assert to_anchor("Pets") == to_anchor("Pets") == "pets"


class TestEndpointAnchor:
    def test_strips_slashes_and_braces(self):
        assert endpoint_anchor("GET", "/users/{id}") == "get-usersid"

    def test_root_path(self):
        assert endpoint_anchor("Post", "/") == "post-"


class TestSchemaAnchor:
    def test_prefix(self):
        assert schema_anchor("User.Profile") == "schema-user-profile"


class TestFindCollisions:
    def test_reports_shared_anchor(self):
        assert find_collisions(["User Profile", "user.profile", "Other"]) == {
            "user-profile": ["User Profile", "user.profile"],
        }

    def test_no_collisions(self):
        assert find_collisions(["A", "B", "A"]) == {}

    def test_custom_anchor_function(self):
        assert find_collisions(["/a/b", "/ab"], lambda path: endpoint_anchor("GET", path)) == {
            "get-ab": ["/a/b", "/ab"],
        }
