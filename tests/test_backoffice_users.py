"""
Tests for backoffice user accounts
"""

from eventboard.domain.status import UserRole
from eventboard.models import BackofficeUser
from eventboard.services.repositories import BackofficeUserRepo

def test_new_user_must_change_password():
    user = BackofficeUser("mod@example.com", "Max", UserRole.MODERATOR)
    assert user.is_active
    assert user.must_change_password

    user.set_password_hash("hashed")
    assert not user.must_change_password
    assert user.password_changed_at is not None

    user.force_password_change()
    assert user.must_change_password

def test_repository_filters_inactive_users(db_session, backoffice_users):
    admin, moderator = backoffice_users
    moderator.deactivate()
    db_session.commit()

    repo = BackofficeUserRepo(db_session)
    assert [u.email for u in repo.find_active()] == ["admin@example.com"]
    assert repo.find_by_role(UserRole.MODERATOR) == []
    assert repo.find_by_email("mod@example.com").id == moderator.id

def test_record_login(db_session, backoffice_users):
    admin, _ = backoffice_users
    admin.record_login()
    db_session.commit()

    assert BackofficeUserRepo(db_session).find_by_email("admin@example.com").last_login_at is not None

def test_find_by_filters_on_columns(db_session, backoffice_users):
    repo = BackofficeUserRepo(db_session)

    assert [u.email for u in repo.find_by(role=UserRole.ADMIN)] == ["admin@example.com"]
    assert repo.find_by(email="ghost@example.com") == []
