"""
Tests for the authorization predicates.

Run with: cd backend && pytest tests/test_policy.py -v

The predicates only read ids and roles, so plain model instances are enough.
"""
import pytest

from referral_board import policy
from referral_board.auth import Principal
from referral_board.errors import AuthorizationError, NotFoundError
from referral_board.models import Job, Referral


@pytest.fixture
def alice():
    return Principal(
        id="alice-id",
        role="jobseeker",
        name="Alice",
        years_of_experience=4,
        current_company="Initech",
        linkedin_profile="https://linkedin.com/in/alice",
    )


@pytest.fixture
def carol():
    return Principal(id="carol-id", role="jobseeker", name="Carol")


@pytest.fixture
def bob():
    return Principal(id="bob-id", role="employer", name="Bob")


@pytest.fixture
def dave():
    return Principal(id="dave-id", role="employer", name="Dave")


@pytest.fixture
def job():
    return Job(id="job-1", user_id="alice-id", company="Hooli", position="Engineer")


@pytest.fixture
def referral():
    return Referral(id="ref-1", job_id="job-1", job_seeker_id="alice-id", employer_id="bob-id", status="pending")


class TestJobRules:
    def test_any_user_can_read_a_job(self, alice, bob, carol, job):
        assert all(policy.can_read_job(p, job) for p in (alice, bob, carol))

    def test_only_owner_can_modify_job(self, alice, carol, bob, job):
        assert policy.can_modify_job(alice, job)
        assert not policy.can_modify_job(carol, job)
        assert not policy.can_modify_job(bob, job)

    def test_complete_jobseeker_can_post(self, alice):
        assert policy.can_post_job(alice)

    def test_incomplete_profile_cannot_post(self, carol):
        assert not policy.profile_is_complete(carol)
        assert not policy.can_post_job(carol)

    def test_zero_years_of_experience_counts_as_set(self, alice):
        junior = Principal(
            id="junior",
            role="jobseeker",
            name="Junior",
            years_of_experience=0,
            current_company=alice.current_company,
            linkedin_profile=alice.linkedin_profile,
        )
        assert policy.can_post_job(junior)

    def test_employer_cannot_post_even_with_complete_profile(self, alice):
        employer = Principal(
            id="e",
            role="employer",
            name="E",
            years_of_experience=alice.years_of_experience,
            current_company=alice.current_company,
            linkedin_profile=alice.linkedin_profile,
        )
        assert not policy.can_post_job(employer)


class TestReferralRules:
    def test_only_employers_create(self, alice, bob):
        assert policy.can_create_referral(bob)
        assert not policy.can_create_referral(alice)

    def test_only_job_seeker_sets_status(self, alice, bob, carol, referral):
        assert policy.can_set_referral_status(alice, referral)
        assert not policy.can_set_referral_status(bob, referral)
        assert not policy.can_set_referral_status(carol, referral)

    def test_only_sending_employer_deletes(self, bob, dave, alice, referral):
        assert policy.can_delete_referral(bob, referral)
        assert not policy.can_delete_referral(dave, referral)
        assert not policy.can_delete_referral(alice, referral)

    def test_both_parties_can_read(self, alice, bob, carol, dave, referral):
        assert policy.can_read_referral(alice, referral)
        assert policy.can_read_referral(bob, referral)
        assert not policy.can_read_referral(carol, referral)
        assert not policy.can_read_referral(dave, referral)

    def test_list_scopes_follow_role(self, alice, bob):
        assert policy.can_list_sent_referrals(bob)
        assert not policy.can_list_sent_referrals(alice)
        assert policy.can_list_received_referrals(alice)
        assert not policy.can_list_received_referrals(bob)
        assert policy.can_clear_referrals(alice)
        assert not policy.can_clear_referrals(bob)


class TestEnsure:
    def test_allowed_passes(self, bob):
        policy.ensure(True, "nope", bob)

    def test_denied_raises_authorization_error(self, bob):
        with pytest.raises(AuthorizationError) as exc_info:
            policy.ensure(False, "Not authorized", bob)

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "Not authorized"
        assert not isinstance(exc_info.value, NotFoundError)
