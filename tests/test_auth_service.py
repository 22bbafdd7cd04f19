import pytest

from services.auth_service import AdminSession, EnvAuthProvider, build_directory


@pytest.fixture
def provider():
    return EnvAuthProvider(build_directory("Admin@GritGym.com", "s3cret", "Coach"))


def test_build_directory_requires_both_values():
    with pytest.raises(RuntimeError):
        build_directory("", "pw")
    with pytest.raises(RuntimeError):
        build_directory("a@b.c", "")


def test_sign_in_success_is_case_insensitive_on_email(provider):
    ok, msg = provider.sign_in("  admin@gritgym.COM ", "s3cret")
    assert ok and msg == "Signed in."
    session = provider.current_session
    assert isinstance(session, AdminSession)
    assert session.email == "admin@gritgym.com"
    assert session.name == "Coach"


def test_sign_in_rejects_bad_credentials(provider):
    assert provider.sign_in("admin@gritgym.com", "wrong") == (False, "Invalid email or password.")
    assert provider.sign_in("nobody@gritgym.com", "s3cret") == (False, "Invalid email or password.")
    assert provider.current_session is None


def test_sign_in_requires_both_fields(provider):
    ok, msg = provider.sign_in("", "")
    assert not ok
    assert msg == "Please enter your email and password."


def test_subscribe_reports_immediately_and_on_change(provider):
    seen = []
    unsubscribe = provider.subscribe(seen.append)
    assert seen == [None]

    provider.sign_in("admin@gritgym.com", "s3cret")
    provider.sign_out()
    assert [s is not None for s in seen] == [False, True, False]

    unsubscribe()
    provider.sign_in("admin@gritgym.com", "s3cret")
    assert len(seen) == 3


def test_failed_sign_in_does_not_notify(provider):
    seen = []
    provider.subscribe(seen.append)
    provider.sign_in("admin@gritgym.com", "nope")
    assert seen == [None]
