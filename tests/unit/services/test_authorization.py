from uuid import uuid4

from src.app.services.authorization import authorize, authorize_owned, check, owner_scope


def test_check_accepts_raw_keys():
    assert check(["documents.*"], "documents.edit") is True
    assert check(["documents.*"], "users.view") is False


def test_authorize_denial_names_missing_key(make_ctx):
    ctx = make_ctx("documents.view", "documents.upload")

    result = authorize(ctx, "documents.delete")

    assert result.is_err()
    assert result.error.code == "MISSING_PERMISSION"
    assert result.error.message == "Missing permission: documents.delete"


def test_authorize_with_wildcard(make_ctx):
    assert authorize(make_ctx("documents.*"), "documents.delete_all").is_ok()
    assert authorize(make_ctx("*"), "users.suspend").is_ok()


def test_authorize_owned_own_resource(make_ctx):
    ctx = make_ctx("documents.delete")

    assert authorize_owned(ctx, "documents.delete", ctx.user_id).is_ok()


def test_authorize_owned_foreign_resource_needs_all_key(make_ctx):
    ctx = make_ctx("documents.delete")

    result = authorize_owned(ctx, "documents.delete", uuid4())

    assert result.is_err()
    assert result.error.message == "Missing permission: documents.delete_all"


def test_authorize_owned_all_key_alone_is_enough(make_ctx):
    ctx = make_ctx("documents.delete_all")

    assert authorize_owned(ctx, "documents.delete", uuid4()).is_ok()


def test_authorize_owned_without_any_key(make_ctx):
    ctx = make_ctx("documents.view")

    result = authorize_owned(ctx, "documents.delete", ctx.user_id)

    assert result.is_err()
    assert result.error.message == "Missing permission: documents.delete"


def test_owner_scope(make_ctx):
    own = make_ctx("documents.view")
    everything = make_ctx("documents.view_all")
    wildcard = make_ctx("documents.*")
    nothing = make_ctx("users.view")

    assert owner_scope(own, "documents.view").value == own.user_id
    assert owner_scope(everything, "documents.view").value is None
    assert owner_scope(wildcard, "documents.view").value is None
    assert owner_scope(nothing, "documents.view").is_err()
