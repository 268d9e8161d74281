import pytest

from folio.schema import constraints as c


class TestStringConstraints:
    """String predicates."""

    def test_non_empty(self):
        assert c.non_empty().check("x")
        assert not c.non_empty().check("")

    def test_length_bounds(self):
        assert c.min_length(3).check("abc")
        assert not c.min_length(3).check("ab")
        assert c.max_length(3).check("abc")
        assert not c.max_length(3).check("abcd")
        assert c.exact_length(2).check("ab")
        assert not c.exact_length(2).check("abc")

    @pytest.mark.parametrize(
        "value",
        ["https://example.com", "http://localhost:3000/path?q=1", "mailto:me@example.com"],
    )
    def test_is_url_accepts(self, value):
        assert c.is_url().check(value)

    @pytest.mark.parametrize("value", ["example.com", "/relative/path", "", "https://"])
    def test_is_url_rejects(self, value):
        assert not c.is_url().check(value)

    def test_is_email(self):
        assert c.is_email().check("sam@example.com")
        assert not c.is_email().check("sam@example")
        assert not c.is_email().check("not an email")

    def test_matches_searches_anywhere(self):
        constraint = c.matches(r"^[A-Z]{3}-\d+$")
        assert constraint.check("MUG-001")
        assert not constraint.check("mug-001")
        assert constraint.param("pattern") == r"^[A-Z]{3}-\d+$"


class TestNumberConstraints:
    """Number predicates."""

    @pytest.mark.parametrize("value, expected", [(-5, False), (0, False), (0.01, True), (10, True)])
    def test_positive(self, value, expected):
        assert c.positive().check(value) is expected

    def test_nonnegative_accepts_zero(self):
        assert c.nonnegative().check(0)
        assert not c.nonnegative().check(-1)

    def test_integer(self):
        assert c.integer().check(3)
        assert c.integer().check(3.0)
        assert not c.integer().check(3.5)

    def test_integer_beyond_float_range(self):
        assert c.integer().check(10**400)
        assert not c.integer().check(float("inf"))

    def test_value_bounds(self):
        assert c.min_value(1).check(1)
        assert not c.min_value(1).check(0.5)
        assert c.max_value(1).check(1)
        assert not c.max_value(1).check(1.5)


class TestConstraintValues:
    """Constraint metadata."""

    def test_applies_to(self):
        assert c.positive().applies_to == frozenset({c.NUMBER})
        assert c.non_empty().applies_to == frozenset({c.STRING})

    def test_equality_ignores_predicate_identity(self):
        assert c.min_length(2) == c.min_length(2)
        assert c.min_length(2) != c.min_length(3)

    def test_describe(self):
        assert c.positive().describe() == "must be greater than 0"
        assert "5" in c.max_length(5).describe()

    def test_param_lookup(self):
        assert c.min_value(4).param("min") == 4
        assert c.min_value(4).param("missing") is None
