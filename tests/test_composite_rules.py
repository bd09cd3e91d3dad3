"""Tests for composite rule builders."""

import pytest

from confguard import (
    ErrorKind,
    EvaluationContext,
    Outcome,
    RuleDefinitionError,
    array_of,
    boolean,
    compose,
    conditional,
    create_schema,
    custom,
    enum,
    number,
    object,
    shape,
    string,
    union,
    validate,
)


# ---------------------------------------------------------------------------
# array_of
# ---------------------------------------------------------------------------


class TestArrayOf:
    def test_all_items_valid(self, validator):
        outcome = validator.validate_value([1, 2, 3], array_of(number()))
        assert outcome.valid is True
        assert outcome.normalized_value == [1, 2, 3]

    def test_stops_at_first_invalid_item(self, validator):
        outcome = validator.validate_value([1, "x", "y"], array_of(number()))
        assert outcome.error_kind == ErrorKind.ITEM_INVALID
        assert outcome.details["index"] == 1
        assert outcome.details["inner"] == "type"

    def test_later_items_not_evaluated(self, validator):
        seen = []

        def record(value, ctx):
            seen.append(value)
            return value != "bad"

        validator.validate_value(["ok", "bad", "never"], array_of(custom(record)))
        assert seen == ["ok", "bad"]

    def test_not_an_array(self, validator):
        outcome = validator.validate_value("abc", array_of(string()))
        assert outcome.error_kind == "type"

    def test_length_checked_before_items(self, validator):
        rule = array_of(number(), max_length=2)
        outcome = validator.validate_value(["x", "y", "z"], rule)
        assert outcome.error_kind == "maxLength"

    def test_empty_array_valid(self, validator):
        assert validator.validate_value([], array_of(number())).valid is True

    def test_schema_reports_single_error(self):
        schema = create_schema({"values": array_of(number())})
        report = validate({"values": [1, "x", 3, "y"]}, schema)
        assert len(report.errors) == 1
        assert report.errors[0].property == "values"
        assert report.errors[0].error_kind == "item_invalid"
        assert report.errors[0].details["index"] == 1

    def test_rejects_non_rule(self):
        with pytest.raises(RuleDefinitionError):
            array_of("number")


# ---------------------------------------------------------------------------
# shape
# ---------------------------------------------------------------------------


class TestShape:
    def test_valid_shape(self, validator):
        rule = shape({"enableAria": boolean(), "errorSummaryId": string()})
        value = {"enableAria": True, "errorSummaryId": "summary"}
        assert validator.validate_value(value, rule).valid is True

    def test_invalid_property(self, validator):
        rule = shape({"enableAria": boolean()})
        outcome = validator.validate_value({"enableAria": "yes"}, rule)
        assert outcome.error_kind == ErrorKind.PROPERTY_INVALID
        assert outcome.details["key"] == "enableAria"
        assert outcome.details["inner"] == "type"

    def test_absent_shape_keys_are_not_required(self, validator):
        rule = shape({"a": number(required=True), "b": number()})
        assert validator.validate_value({}, rule).valid is True

    def test_object_required_keys_do_enforce_presence(self, validator):
        # contrast with shape(): presence is only enforced by object()
        outcome = validator.validate_value({}, object(required_keys=["a"]))
        assert outcome.error_kind == "required"

    def test_presence_via_compose(self, validator):
        rule = compose(object(required_keys=["a"]), shape({"a": number()}))
        assert validator.validate_value({}, rule).error_kind == "required"
        assert validator.validate_value({"a": "x"}, rule).error_kind == "property_invalid"
        assert validator.validate_value({"a": 1}, rule).valid is True

    def test_extra_keys_ignored(self, validator):
        rule = shape({"a": number()})
        assert validator.validate_value({"a": 1, "z": "anything"}, rule).valid is True

    @pytest.mark.parametrize("value", [None, [1], "x"])
    def test_not_an_object(self, validator, value):
        assert validator.validate_value(value, shape({})).error_kind == "type"

    def test_first_failing_key_in_shape_order(self, validator):
        rule = shape({"a": number(), "b": number()})
        outcome = validator.validate_value({"b": "x", "a": "y"}, rule)
        assert outcome.details["key"] == "a"

    def test_rejects_non_mapping(self):
        with pytest.raises(RuleDefinitionError):
            shape([number()])


# ---------------------------------------------------------------------------
# union
# ---------------------------------------------------------------------------


class TestUnion:
    def test_first_match_wins(self, validator):
        calls = []

        def first(value, ctx):
            calls.append("first")
            return True

        def second(value, ctx):
            calls.append("second")
            return True

        rule = union(custom(first), custom(second))
        assert validator.validate_value(1, rule).valid is True
        assert calls == ["first"]

    def test_string_or_number(self, validator):
        rule = union(string(), number())
        assert validator.validate_value("a", rule).valid is True
        assert validator.validate_value(1, rule).valid is True

    def test_no_match(self, validator):
        outcome = validator.validate_value(True, union(string(), number()))
        assert outcome.valid is False
        assert outcome.error_kind == ErrorKind.UNION
        assert outcome.details["attempted"] == ["type", "type"]

    def test_attempted_kinds_in_order(self, validator):
        rule = union(number(max=1), string())
        outcome = validator.validate_value(5, rule)
        assert outcome.details["attempted"] == ["max", "type"]

    def test_returns_matching_outcome(self, validator):
        rule = union(custom(lambda v, ctx: Outcome.success(v * 2)), number())
        assert validator.validate_value(2, rule).normalized_value == 4

    def test_requires_rules(self):
        with pytest.raises(RuleDefinitionError):
            union()


# ---------------------------------------------------------------------------
# enum
# ---------------------------------------------------------------------------


class TestEnum:
    def test_member(self, validator):
        assert validator.validate_value("a", enum("a", "b")).valid is True

    def test_non_member(self, validator):
        outcome = validator.validate_value("c", enum("a", "b"))
        assert outcome.valid is False
        assert outcome.error_kind == ErrorKind.ENUM
        assert outcome.details["allowed"] == ["a", "b"]

    def test_bool_does_not_match_int(self, validator):
        assert validator.validate_value(True, enum(1, 2)).valid is False
        assert validator.validate_value(1, enum(True)).valid is False

    def test_none_member(self, validator):
        assert validator.validate_value(None, enum(None, "auto")).valid is True

    def test_int_matches_equal_float(self, validator):
        assert validator.validate_value(1.0, enum(1)).valid is True

    def test_requires_values(self):
        with pytest.raises(RuleDefinitionError):
            enum()


# ---------------------------------------------------------------------------
# conditional
# ---------------------------------------------------------------------------


class TestConditional:
    @pytest.fixture
    def search_schema(self):
        return create_schema(
            {
                "enableSearch": boolean(default=True),
                "searchDelay": conditional(
                    lambda config: config.get("enableSearch") is True,
                    number(min=100),
                ),
            }
        )

    def test_rule_applied_when_sibling_enables_it(self, search_schema):
        report = validate({"enableSearch": True, "searchDelay": 5}, search_schema)
        assert report.valid is False
        assert report.errors[0].property == "searchDelay"
        assert report.errors[0].error_kind == "min"

    def test_rule_skipped_when_sibling_disables_it(self, search_schema):
        report = validate({"enableSearch": False, "searchDelay": 5}, search_schema)
        assert report.valid is True
        assert report.config["searchDelay"] == 5

    def test_predicate_sees_input_not_defaults(self, search_schema):
        # enableSearch is defaulted to True in the output, but the predicate
        # only sees the input configuration
        report = validate({"searchDelay": 5}, search_schema)
        assert report.valid is True
        assert report.config["enableSearch"] is True

    def test_predicate_receives_read_only_config(self, validator):
        def mutate(config):
            config["x"] = 1
            return True

        schema = create_schema({"a": conditional(mutate, number())})
        config = {"a": 1}
        report = validator.validate(config, schema)
        assert report.valid is False
        assert report.errors[0].error_kind == "invalid"
        assert config == {"a": 1}

    def test_without_context_config_is_empty(self, validator):
        rule = conditional(lambda config: "flag" in config, number())
        assert validator.validate_value("not a number", rule).valid is True

    def test_explicit_context(self, validator):
        rule = conditional(lambda config: config.get("flag"), number())
        context = EvaluationContext(validator=validator, config={"flag": True})
        assert validator.validate_value("x", rule, context).error_kind == "type"

    def test_nested_rules_see_root_config(self):
        schema = create_schema(
            {
                "strictItems": boolean(),
                "items": array_of(
                    conditional(lambda config: config.get("strictItems"), number())
                ),
            }
        )
        assert validate({"strictItems": False, "items": ["a"]}, schema).valid is True
        assert validate({"strictItems": True, "items": ["a"]}, schema).valid is False

    def test_predicate_must_be_callable(self):
        with pytest.raises(RuleDefinitionError):
            conditional(True, number())


# ---------------------------------------------------------------------------
# compose
# ---------------------------------------------------------------------------


class TestCompose:
    def test_all_pass(self, validator):
        rule = compose(number(min=0), custom(lambda v, ctx: v % 2 == 0))
        assert validator.validate_value(4, rule).valid is True

    def test_short_circuits_on_first_failure(self, validator):
        calls = []

        def track(value, ctx):
            calls.append(value)
            return True

        rule = compose(number(), custom(track))
        outcome = validator.validate_value("x", rule)
        assert outcome.error_kind == "type"
        assert calls == []

    def test_second_rule_failure(self, validator):
        rule = compose(number(min=0), custom(lambda v, ctx: v % 2 == 0))
        assert validator.validate_value(3, rule).error_kind == "invalid"

    def test_single_argument_custom_in_schema(self):
        report = validate(
            {"n": 2}, {"n": compose(number(), custom(lambda v: Outcome.success(v)))}
        )
        assert report.valid is True
        assert report.config == {"n": 2}

    def test_returns_input_value(self, validator):
        rule = compose(custom(lambda v, ctx: Outcome.success("changed")))
        assert validator.validate_value("orig", rule).normalized_value == "orig"

    def test_requires_rules(self):
        with pytest.raises(RuleDefinitionError):
            compose()


# ---------------------------------------------------------------------------
# custom
# ---------------------------------------------------------------------------


class TestCustom:
    def test_kind_is_custom(self):
        assert custom(lambda v, ctx: True).kind == "custom"

    def test_carries_schema_flags(self):
        rule = custom(lambda v, ctx: True, required=True)
        assert rule.required is True

    def test_requires_callable(self):
        with pytest.raises(RuleDefinitionError):
            custom("not callable")
