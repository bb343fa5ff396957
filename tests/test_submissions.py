"""Tests for the submission handlers against the in-memory form store."""

import random

from services.profile_codes import ProfileCodeGenerator
from services.submissions import (
    CHECK_IN_SUBMIT_FAILED,
    CODE_GENERATION_FAILED,
    EMAIL_NOT_FOUND,
    EMAIL_TAKEN,
    FORM_SUBMIT_FAILED,
    PROFILE_CODE_NOT_FOUND,
    UNEXPECTED_ERROR,
    FormSubmissionService,
)


def test_profile_success_returns_code_and_inserts_once(service, store, profile_fields):
    result = service.submit_profile(profile_fields, store)

    assert result.status_code == 201
    assert result.state.success is True
    code = result.state.profile_code
    assert len(code) == 4 and code.isdigit()
    assert code in result.state.message
    assert len(store.profile_inserts) == 1
    inserted = store.profile_inserts[0]
    assert inserted["profile_code"] == code
    assert inserted["email"] == "jane.doe@example.com"
    assert inserted["current_weight"] == 72.5
    assert len(inserted["user_id"]) == 36


def test_invalid_profile_touches_nothing(service, store, profile_fields):
    profile_fields["phone"] = "123"
    result = service.submit_profile(profile_fields, store)

    assert result.status_code == 422
    assert result.state.errors == {"phone": ["Please enter a valid phone number"]}
    assert store.code_lookups == []
    assert store.profile_inserts == []


def test_profile_retries_when_code_is_claimed_concurrently(service, store, profile_fields):
    store.code_races = 1
    result = service.submit_profile(profile_fields, store)

    assert result.state.success is True
    assert len(store.profile_inserts) == 2
    lost, won = store.profile_inserts
    assert won["profile_code"] == result.state.profile_code
    assert won["profile_code"] != lost["profile_code"]


def test_profile_duplicate_email_is_a_field_error(service, store, profile_fields):
    store.add_profile(profile_code="1111", email="jane.doe@example.com", first_name="Jane", last_name="Doe")
    result = service.submit_profile(profile_fields, store)

    assert result.status_code == 409
    assert result.state.errors == {"email": [EMAIL_TAKEN]}


def test_profile_fails_when_codes_are_exhausted(service, store, profile_fields):
    store.all_codes_taken = True
    result = service.submit_profile(profile_fields, store)

    assert result.status_code == 503
    assert result.state.errors == {"_form": [CODE_GENERATION_FAILED]}
    assert len(store.code_lookups) == 10
    assert store.profile_inserts == []


def test_profile_code_races_count_against_the_budget(store, profile_fields):
    service = FormSubmissionService(ProfileCodeGenerator(rng=random.Random(5), max_attempts=3))
    store.code_races = 3
    result = service.submit_profile(profile_fields, store)

    assert result.state.errors == {"_form": [CODE_GENERATION_FAILED]}
    assert len(store.profile_inserts) <= 3


def test_profile_insert_failure_is_generic(service, store, profile_fields):
    store.failing.add("insert_profile")
    result = service.submit_profile(profile_fields, store)

    assert result.status_code == 503
    assert result.state.errors == {"_form": [FORM_SUBMIT_FAILED]}


def test_check_in_unknown_code_is_field_error_without_insert(service, store, check_in_fields):
    result = service.submit_check_in(check_in_fields, store)

    assert result.status_code == 404
    assert result.state.errors == {"profileCode": [PROFILE_CODE_NOT_FOUND]}
    assert store.check_ins == []


def test_check_in_success_stores_parsed_values(service, store, check_in_fields):
    profile = store.add_profile(profile_code="4821", email="jane@example.com", first_name="Jane", last_name="Doe")
    check_in_fields["profileCode"] = " 4821 "
    result = service.submit_check_in(check_in_fields, store)

    assert result.status_code == 201
    assert result.state.success is True
    assert store.check_ins == [{
        "profile_id": profile.id,
        "current_weight": 71.8,
        "cravings_scale": 3,
        "calorie_goal_met": "yes",
    }]


def test_check_in_backend_down_is_not_a_field_error(service, store, check_in_fields):
    store.failing.add("find_profile_by_code")
    result = service.submit_check_in(check_in_fields, store)

    assert result.status_code == 503
    assert result.state.errors == {"_form": [UNEXPECTED_ERROR]}


def test_check_in_insert_failure_is_generic(service, store, check_in_fields):
    store.add_profile(profile_code="4821", email="jane@example.com", first_name="Jane", last_name="Doe")
    store.failing.add("insert_check_in")
    result = service.submit_check_in(check_in_fields, store)

    assert result.state.errors == {"_form": [CHECK_IN_SUBMIT_FAILED]}


def test_invalid_check_in_does_no_lookup(service, store, check_in_fields):
    check_in_fields["cravingsScale"] = "0"
    result = service.submit_check_in(check_in_fields, store)

    assert result.status_code == 422
    assert store.code_lookups == []


def test_contact_stores_trimmed_values(service, store):
    fields = {"name": "  Jane  ", "email": " jane@example.com ", "message": "  Please call me back.  "}
    result = service.submit_contact(fields, store)

    assert result.status_code == 201
    assert store.contacts == [{"name": "Jane", "email": "jane@example.com", "message": "Please call me back."}]


def test_contact_failure_is_generic(service, store):
    store.failing.add("insert_contact")
    fields = {"name": "Jane", "email": "jane@example.com", "message": "Please call me back."}
    result = service.submit_contact(fields, store)

    assert result.state.success is False
    assert result.state.errors == {"_form": [FORM_SUBMIT_FAILED]}


def test_lookup_normalizes_email(service, store):
    store.add_profile(profile_code="4821", email="jane@example.com", first_name="Jane", last_name="Doe")
    result = service.lookup_profile({"email": "  Jane@Example.COM "}, store)

    assert result.status_code == 200
    assert result.state.profile_code == "4821"
    assert result.state.display_name == "Jane Doe"
    assert result.state.message == "Found profile for Jane Doe"


def test_lookup_not_found(service, store):
    result = service.lookup_profile({"email": "nobody@example.com"}, store)

    assert result.status_code == 404
    assert result.state.errors == {"email": [EMAIL_NOT_FOUND]}


def test_lookup_backend_down(service, store):
    store.failing.add("find_profile_by_email")
    result = service.lookup_profile({"email": "jane@example.com"}, store)

    assert result.status_code == 503
    assert result.state.errors == {"_form": [UNEXPECTED_ERROR]}
