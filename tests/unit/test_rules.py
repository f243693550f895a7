from __future__ import annotations

from datetime import date

import pytest

from bulk_import.models.error_record import ErrorType
from bulk_import.models.field_schema import EntitySchema, FieldSpec
from bulk_import.models.row_data import RowData
from bulk_import.schemas.entities import DESIGNATION, JOB_TYPE, SBU, TRAINING, UNIVERSITY, USER
from bulk_import.validation.rules import (
    BooleanRule,
    ChoicesRule,
    CompositeUniquenessRule,
    DateRule,
    PatternRule,
    RequiredFieldRule,
    UniquenessRule,
    canonical_choice,
    format_rules_for,
    normalize_key,
    parse_boolean,
    parse_date,
)


def _row(n: int = 2, **values: str) -> RowData:
    return RowData(row_number=n, values=values)


def test_normalize_key():
    assert normalize_key("  Software Engineer ") == "software engineer"


@pytest.mark.parametrize("raw,expected", [
    ("true", True), ("YES", True), (" y ", True), ("1", True),
    ("false", False), ("No", False), ("n", False), ("0", False),
    ("maybe", None), ("", None),
])
def test_parse_boolean(raw, expected):
    assert parse_boolean(raw) is expected


def test_required_rule_blank_and_absent():
    rule = RequiredFieldRule(DESIGNATION, DESIGNATION.get_field("name"))
    assert rule.check(_row(name="Engineer")) == []
    errs = rule.check(_row(3, name="   "))
    assert len(errs) == 1
    assert errs[0].row == 3
    assert errs[0].message == "Name is required"
    assert errs[0].error_type == ErrorType.MISSING_REQUIRED_FIELD
    assert rule.check(_row())[0].value == ""


@pytest.mark.parametrize("color", ["#ABC", "ABCDEF", "#12345G", "123456", "#1234567"])
def test_hex_color_rejected(color):
    rule = PatternRule(JOB_TYPE, JOB_TYPE.get_field("color_code"))
    errs = rule.check(_row(name="Remote", color_code=color))
    assert len(errs) == 1
    assert errs[0].error_type == ErrorType.INVALID_FORMAT
    assert errs[0].message == "Color code must be in hex format (e.g., #FF0000)"


@pytest.mark.parametrize("color", ["#1A2B3C", "#ffffff", "  #FF0000  "])
def test_hex_color_accepted(color):
    rule = PatternRule(JOB_TYPE, JOB_TYPE.get_field("color_code"))
    assert rule.check(_row(name="Remote", color_code=color)) == []


def test_format_rule_skips_blank_value():
    rule = PatternRule(JOB_TYPE, JOB_TYPE.get_field("color_code"))
    assert rule.check(_row(name="Remote", color_code="  ")) == []
    assert rule.check(_row(name="Remote")) == []


def test_pattern_rule_default_message():
    spec = FieldSpec(name="code", pattern=r"[A-Z]{3}")
    schema = EntitySchema(name="x", label="x", plural="xs", fields=(spec,))
    errs = PatternRule(schema, spec).check(_row(code="ab"))
    assert errs[0].message == "Code has an invalid format: 'ab'"


def test_pattern_rule_requires_pattern():
    spec = FieldSpec(name="code")
    schema = EntitySchema(name="x", label="x", plural="xs", fields=(spec,))
    with pytest.raises(ValueError):
        PatternRule(schema, spec)


def test_choices_rule_case_insensitive():
    spec = UNIVERSITY.get_field("type")
    rule = ChoicesRule(UNIVERSITY, spec)
    assert rule.check(_row(type="public")) == []
    errs = rule.check(_row(type="Community"))
    assert errs[0].message == (
        "Type must be one of: Public, Private, International, Special (case insensitive)"
    )
    assert canonical_choice(spec, " PRIVATE ") == "Private"
    assert canonical_choice(spec, "other") is None


def test_boolean_rule():
    rule = BooleanRule(SBU, SBU.get_field("is_department"))
    assert rule.check(_row(is_department="Yes")) == []
    errs = rule.check(_row(is_department="sometimes"))
    assert errs[0].message == "Is department must be true or false"


def test_format_rules_for_field_kinds():
    assert format_rules_for(DESIGNATION, DESIGNATION.get_field("name")) == []
    assert [type(r) for r in format_rules_for(JOB_TYPE, JOB_TYPE.get_field("color_code"))] == [PatternRule]
    assert [type(r) for r in format_rules_for(SBU, SBU.get_field("is_department"))] == [BooleanRule]
    assert [type(r) for r in format_rules_for(UNIVERSITY, UNIVERSITY.get_field("type"))] == [ChoicesRule]
    assert [type(r) for r in format_rules_for(TRAINING, TRAINING.get_field("expiry_date"))] == [DateRule]
    assert [type(r) for r in format_rules_for(USER, USER.get_field("role"))] == [ChoicesRule]


def test_uniqueness_in_file_first_occurrence_wins():
    rule = UniquenessRule(DESIGNATION, DESIGNATION.get_field("name"))
    assert rule.check(_row(2, name="Software Engineer")) == []
    errs = rule.check(_row(3, name=" software engineer "))
    assert len(errs) == 1
    assert errs[0].error_type == ErrorType.DUPLICATE_IN_FILE
    assert errs[0].message == 'Duplicate designation "software engineer" found in CSV'


def test_uniqueness_against_existing_flags_every_occurrence():
    rule = UniquenessRule(DESIGNATION, DESIGNATION.get_field("name"), [{"name": "Project Manager"}])
    first = rule.check(_row(2, name="project manager"))
    assert [e.error_type for e in first] == [ErrorType.DUPLICATE_IN_DATABASE]
    assert first[0].message == 'Designation "project manager" already exists'
    second = rule.check(_row(3, name="Project Manager"))
    assert [e.error_type for e in second] == [
        ErrorType.DUPLICATE_IN_DATABASE,
        ErrorType.DUPLICATE_IN_FILE,
    ]


def test_uniqueness_ignores_blank_and_null_existing():
    rule = UniquenessRule(DESIGNATION, DESIGNATION.get_field("name"), [{"name": None}, {"other": "x"}, {"name": ""}])
    assert rule.existing_keys == set()
    assert rule.check(_row(name="")) == []
    assert rule.check(_row(3, name="")) == []


def test_duplicate_label_used_for_email():
    rule = UniquenessRule(SBU, SBU.get_field("sbu_head_email"), [{"sbu_head_email": "a@b.co"}])
    errs = rule.check(_row(sbu_head_email="A@B.co"))
    assert errs[0].message == 'Email "A@B.co" already exists'


@pytest.mark.parametrize("raw,expected", [
    ("2024-01-15", date(2024, 1, 15)),
    (" 03/20/2024 ", date(2024, 3, 20)),
    ("2024-02-30", None),
    ("15.01.2024", None),
    ("", None),
])
def test_parse_date(raw, expected):
    assert parse_date(raw) == expected


def test_date_rule_uses_field_message():
    rule = DateRule(TRAINING, TRAINING.get_field("expiry_date"))
    assert rule.check(_row(expiry_date="12/10/2026")) == []
    assert rule.check(_row(expiry_date="  ")) == []
    errs = rule.check(_row(expiry_date="next year"))
    assert errs[0].error_type == ErrorType.INVALID_FORMAT
    assert errs[0].message == "Invalid expiry date format. Use YYYY-MM-DD or MM/DD/YYYY"


def test_date_rule_default_message():
    schema = EntitySchema(name="t", label="t", plural="ts", fields=(FieldSpec(name="started_on", kind="date"),))
    rule = DateRule(schema, schema.fields[0])
    errs = rule.check(_row(started_on="yesterday"))
    assert errs[0].message == "Started on must be a valid date (YYYY-MM-DD or MM/DD/YYYY)"


@pytest.mark.parametrize("url,ok", [
    ("https://example.com/certificate1", True),
    ("http://certs.example.org", True),
    ("example.com/cert", False),
    ("https://", False),
    ("https://exa mple.com", False),
])
def test_certificate_url_pattern(url, ok):
    rule = PatternRule(TRAINING, TRAINING.get_field("certificate_url"))
    errs = rule.check(_row(certificate_url=url))
    assert (errs == []) is ok
    if not ok:
        assert errs[0].message == "Invalid URL format"


def test_role_choice_case_insensitive_message():
    rule = ChoicesRule(USER, USER.get_field("role"))
    assert rule.check(_row(role="MANAGER")) == []
    errs = rule.check(_row(role="owner"))
    assert errs[0].message == "Role must be one of: admin, manager, employee (case insensitive)"


def test_composite_uniqueness_in_file():
    rule = CompositeUniquenessRule(TRAINING, TRAINING.unique_together[0])
    assert rule.check(_row(2, employee_id="EMP001", title="AWS")) == []
    # same title for another employee is fine
    assert rule.check(_row(3, employee_id="EMP002", title="AWS")) == []
    errs = rule.check(_row(4, employee_id="emp001", title=" aws "))
    assert [(e.row, e.field, e.error_type) for e in errs] == [
        (4, "employee_id+title", ErrorType.DUPLICATE_IN_FILE),
    ]
    assert errs[0].value == "emp001-aws"
    assert errs[0].message == 'Duplicate employee ID and title combination "emp001-aws" found in CSV'


def test_composite_uniqueness_against_existing_and_blank_parts():
    existing = [{"employee_id": "EMP001", "title": "AWS"}, {"employee_id": "EMP009", "title": None}]
    rule = CompositeUniquenessRule(TRAINING, TRAINING.unique_together[0], existing)
    assert rule.existing_keys == {("emp001", "aws")}
    errs = rule.check(_row(2, employee_id="EMP001", title="AWS"))
    assert [e.error_type for e in errs] == [ErrorType.DUPLICATE_IN_DATABASE]
    assert errs[0].message == 'Employee ID and title combination "EMP001-AWS" already exists'
    assert rule.check(_row(3, employee_id="EMP009", title="")) == []
