"""User entity tests."""

import pytest

from gratiday.entities import Quote, User
from gratiday.errors import DependencyError, DuplicateError, StateError, ValidationError


def test_hash_password_is_salted():
    """Hashing twice gives different values that both verify."""
    first = User.hash_password("secret1")
    second = User.hash_password("secret1")

    assert first != second
    salt, digest = first.split(":")
    assert len(salt) == 32
    assert len(digest) == 128
    assert User.verify_password("secret1", first)
    assert User.verify_password("secret1", second)
    assert not User.verify_password("secret2", first)


def test_verify_password_rejects_malformed_hash():
    """A stored value without the salt separator never verifies."""
    assert not User.verify_password("secret1", "not-a-hash")
    assert not User.verify_password("secret1", "")
    assert not User.verify_password("secret1", None)


def test_create_user(db, ana):
    """Creating a user assigns an id, a timestamp and stores only the hash."""
    assert ana.id_user is not None
    assert ana.fecha_creacion is not None
    assert ana.password_hash != "secret1"

    stored = User.find_by_id(ana.id_user, db=db)
    assert stored.nombre == "Ana"
    assert stored.correo_electronico == "ana@x.com"
    assert stored.rol == "user"
    assert User.verify_password("secret1", stored.password_hash)


def test_create_user_validation(db):
    """Invalid users are rejected before touching the store."""
    user = User(nombre="A", correo_electronico="nope", db=db)
    with pytest.raises(ValidationError) as exc_info:
        user.create("123")

    assert "Email address is not valid" in exc_info.value.errors
    assert user.id_user is None
    assert User.count(db=db) == 0


def test_duplicate_email(db, ana):
    """A second account with the same email is a DuplicateError."""
    with pytest.raises(DuplicateError, match="already registered"):
        User(nombre="Other Ana", correo_electronico="ana@x.com", db=db).create("secret2")


def test_find_by_email(db, ana):
    """Users can be found by email; unknown emails return None."""
    assert User.find_by_email("ana@x.com", db=db).id_user == ana.id_user
    assert User.find_by_email("nobody@x.com", db=db) is None
    assert User.find_by_id(ana.id_user + 1000, db=db) is None


def test_find_all_newest_first(db, ana):
    """Listing returns the newest account first and honours pagination."""
    ben = User(nombre="Ben", correo_electronico="ben@x.com", db=db).create("secret1")

    users = User.find_all(db=db)
    assert [user.id_user for user in users] == [ben.id_user, ana.id_user]
    assert [user.id_user for user in User.find_all(limit=1, offset=1, db=db)] == [ana.id_user]
    assert User.count(db=db) == 2


def test_update_user(db, ana):
    """Updates change name, email and role but keep the password hash."""
    original_hash = ana.password_hash
    ana.update({"nombre": "Ana Maria", "rol": "admin", "id_user": 999})

    stored = User.find_by_id(ana.id_user, db=db)
    assert stored.nombre == "Ana Maria"
    assert stored.rol == "admin"
    assert stored.password_hash == original_hash
    assert ana.id_user != 999


def test_update_user_rejects_unknown_fields(db, ana):
    """Password changes do not go through update()."""
    with pytest.raises(ValidationError):
        ana.update({"password_hash": "x:y"})


def test_update_user_validation(db, ana):
    """Invalid updates leave the row untouched."""
    with pytest.raises(ValidationError):
        ana.update({"correo_electronico": "broken"})

    assert User.find_by_id(ana.id_user, db=db).correo_electronico == "ana@x.com"


def test_update_password(db, ana):
    """The new password authenticates and the old one no longer does."""
    ana.update_password("another1")

    assert User.authenticate("ana@x.com", "another1", db=db).id_user == ana.id_user
    assert User.authenticate("ana@x.com", "secret1", db=db) is None


def test_update_password_too_short(db, ana):
    """Short passwords are rejected."""
    with pytest.raises(ValidationError):
        ana.update_password("123")


def test_authenticate(db, ana):
    """Authentication needs a known email and the right password."""
    assert User.authenticate("ana@x.com", "secret1", db=db).id_user == ana.id_user
    assert User.authenticate("ana@x.com", "wrong", db=db) is None
    assert User.authenticate("nobody@x.com", "secret1", db=db) is None


def test_to_dict_omits_password_hash(ana):
    """The plain representation never carries the hash."""
    data = ana.to_dict()
    assert "password_hash" not in data
    assert data["correo_electronico"] == "ana@x.com"
    assert data["id_user"] == ana.id_user


def test_delete_user(db, ana):
    """Deleting removes the row and reports it."""
    assert ana.delete() is True
    assert User.find_by_id(ana.id_user, db=db) is None


def test_delete_user_with_quotes(db, ana, hope):
    """Users that still own quotes cannot be deleted."""
    Quote(
        texto="Every day brings something new",
        creado_por=ana.id_user,
        categoria_id=hope.id_category,
        db=db,
    ).create()

    with pytest.raises(DependencyError):
        ana.delete()
    assert User.find_by_id(ana.id_user, db=db) is not None


def test_operations_without_id(db):
    """Updating or deleting an unsaved user is a state error."""
    user = User(nombre="Ana", correo_electronico="ana@x.com", db=db)
    with pytest.raises(StateError):
        user.update({"nombre": "Anna"})
    with pytest.raises(StateError):
        user.delete()
    with pytest.raises(StateError):
        user.update_password("secret1")
