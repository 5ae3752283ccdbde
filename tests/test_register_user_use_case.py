from __future__ import annotations

import pytest

from identity_api.application.dto.auth import RegisterUserInput
from identity_api.application.use_cases.register_user import RegisterUserUseCase
from identity_api.domain.exceptions import (
    ConflictError,
    InternalError,
    UnavailableError,
    UploadFailedError,
    ValidationError,
)


def _command(make_media, **overrides) -> RegisterUserInput:
    values = {
        "full_name": "Alice Doe",
        "email": "alice@example.com",
        "username": "Alice",
        "password": "s3cret-pass",
        "avatar": make_media("avatar.png"),
        "cover_image": make_media("cover.png"),
    }
    values.update(overrides)
    return RegisterUserInput(**values)


def test_register_creates_user_with_lowercase_username_and_media_urls(user_store, media_uploader, make_media):
    use_case = RegisterUserUseCase(user_store=user_store, media_uploader=media_uploader)

    output = use_case.execute(_command(make_media))

    assert output.user.username == "alice"
    assert output.user.avatar == "https://media.example.com/avatar.png"
    assert output.user.cover_image == "https://media.example.com/cover.png"
    stored = user_store.get_user_by_id(user_id=output.user.id)
    assert stored.password_hash == "hashed::s3cret-pass"
    assert stored.refresh_token is None


def test_register_projection_never_exposes_password_or_refresh_token(user_store, media_uploader, make_media):
    use_case = RegisterUserUseCase(user_store=user_store, media_uploader=media_uploader)

    output = use_case.execute(_command(make_media))

    assert not hasattr(output.user, "password_hash")
    assert not hasattr(output.user, "refresh_token")


@pytest.mark.parametrize("field", ["full_name", "email", "username", "password"])
def test_register_rejects_blank_fields(user_store, media_uploader, make_media, field):
    use_case = RegisterUserUseCase(user_store=user_store, media_uploader=media_uploader)

    with pytest.raises(ValidationError):
        use_case.execute(_command(make_media, **{field: "   "}))

    assert user_store.users == {}
    assert media_uploader.uploaded == []


@pytest.mark.parametrize(
    "overrides",
    [
        {"username": "ALICE", "email": "other@example.com"},
        {"username": "someone-else", "email": "Alice@Example.com"},
    ],
)
def test_register_twice_conflicts_without_state_change(user_store, media_uploader, make_media, overrides):
    use_case = RegisterUserUseCase(user_store=user_store, media_uploader=media_uploader)
    use_case.execute(_command(make_media))
    snapshot = dict(user_store.users)
    uploads_before = list(media_uploader.uploaded)

    with pytest.raises(ConflictError):
        use_case.execute(_command(make_media, **overrides))

    assert user_store.users == snapshot
    assert media_uploader.uploaded == uploads_before


def test_register_requires_avatar(user_store, media_uploader, make_media):
    use_case = RegisterUserUseCase(user_store=user_store, media_uploader=media_uploader)

    with pytest.raises(ValidationError):
        use_case.execute(_command(make_media, avatar=None))

    assert user_store.users == {}


def test_register_fails_when_avatar_upload_returns_no_url(user_store, media_uploader, make_media):
    media_uploader.empty_urls.add("avatar.png")
    use_case = RegisterUserUseCase(user_store=user_store, media_uploader=media_uploader)

    with pytest.raises(UploadFailedError):
        use_case.execute(_command(make_media))

    assert user_store.users == {}


def test_register_propagates_avatar_upload_timeout(user_store, media_uploader, make_media):
    media_uploader.failures["avatar.png"] = UnavailableError("Media host is unavailable.")
    use_case = RegisterUserUseCase(user_store=user_store, media_uploader=media_uploader)

    with pytest.raises(UnavailableError):
        use_case.execute(_command(make_media))


def test_register_degrades_failed_cover_upload_to_empty(user_store, media_uploader, make_media):
    media_uploader.failures["cover.png"] = UploadFailedError("Media upload failed.")
    use_case = RegisterUserUseCase(user_store=user_store, media_uploader=media_uploader)

    output = use_case.execute(_command(make_media))

    assert output.user.cover_image == ""
    assert output.user.avatar == "https://media.example.com/avatar.png"


def test_register_without_cover_image(user_store, media_uploader, make_media):
    use_case = RegisterUserUseCase(user_store=user_store, media_uploader=media_uploader)

    output = use_case.execute(_command(make_media, cover_image=None))

    assert output.user.cover_image == ""
    assert media_uploader.uploaded == ["avatar.png"]


def test_register_raises_internal_when_created_user_cannot_be_read(user_store, media_uploader, make_media):
    user_store.hide_public_reads = True
    use_case = RegisterUserUseCase(user_store=user_store, media_uploader=media_uploader)

    with pytest.raises(InternalError):
        use_case.execute(_command(make_media))


def test_register_losing_uniqueness_race_logs_uploaded_media(
    user_store, media_uploader, make_media, monkeypatch, caplog
):
    def _lost_race(**kwargs):
        raise ConflictError("User with email or username already exists.")

    monkeypatch.setattr(user_store, "create_user", _lost_race)
    use_case = RegisterUserUseCase(user_store=user_store, media_uploader=media_uploader)

    with caplog.at_level("WARNING", logger="identity_api.application.use_cases.register_user"):
        with pytest.raises(ConflictError):
            use_case.execute(_command(make_media))

    assert "orphaned_media" in caplog.text
    assert "https://media.example.com/avatar.png" in caplog.text
    assert "https://media.example.com/cover.png" in caplog.text
