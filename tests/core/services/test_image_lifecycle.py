import re
from unittest.mock import patch

import pytest

from core.models.errors import ConfigurationError, StoreError
from core.models.image import ImageContent, StoredImage, StoredObject
from core.repositories.storage_repository import ObjectStoreRepository
from core.services.image_lifecycle import ImageLifecycleManager

BUCKET_URL = "https://photos.s3.us-east-1.amazonaws.com/"


class RecordingStore(ObjectStoreRepository):
    """In-memory object store that records every remote call in order."""

    def __init__(
        self,
        *,
        bucket: str | None = "photos",
        delete_exc: Exception | None = None,
        put_exc: Exception | None = None,
    ) -> None:
        self.bucket = bucket
        self.delete_exc = delete_exc
        self.put_exc = put_exc
        self.objects: dict[str, bytes] = {}
        self.calls: list[tuple[str, str]] = []

    def require_bucket(self) -> str:
        if self.bucket is None:
            raise ConfigurationError(message="S3_BUCKET is not configured", setting="S3_BUCKET")
        return self.bucket

    def object_url(self, key: str) -> str:
        self.require_bucket()
        return BUCKET_URL + key

    def put(self, *, key: str, body: bytes, content_type: str) -> StoredImage:
        self.require_bucket()
        self.calls.append(("put", key))
        if self.put_exc:
            raise self.put_exc
        self.objects[key] = body
        return StoredImage(key=key, url=self.object_url(key), content_type=content_type, size=len(body))

    def get(self, *, key: str) -> ImageContent:
        self.calls.append(("get", key))
        return ImageContent(body=self.objects[key], content_type="image/jpeg")

    def delete(self, *, key: str) -> None:
        self.require_bucket()
        self.calls.append(("delete", key))
        if self.delete_exc:
            raise self.delete_exc
        self.objects.pop(key, None)

    def list_by_prefix(self, *, prefix: str, max_results: int) -> list[StoredObject]:
        self.require_bucket()
        self.calls.append(("list", prefix))
        keys = sorted(key for key in self.objects if key.startswith(prefix))
        return [StoredObject(key=key, size=len(self.objects[key])) for key in keys[:max_results]]

    def exists(self, *, key: str) -> bool:
        self.calls.append(("head", key))
        return key in self.objects


def access_denied() -> StoreError:
    return StoreError(message="Access Denied", code="AccessDenied", status_code=403)


class TestCreateImage:
    def test_empty_body_is_noop(self) -> None:
        store = RecordingStore()

        assert ImageLifecycleManager(store).create_image(b"", "image/jpeg") is None
        assert ImageLifecycleManager(store).create_image(None, "image/jpeg", 1) is None
        assert store.calls == []

    def test_owner_key(self) -> None:
        store = RecordingStore()

        image = ImageLifecycleManager(store).create_image(b"abc", "image/jpeg", 42)

        assert image is not None
        assert re.match(r"^suppliers/42-\d+\.jpg$", image.key)
        assert image.url == BUCKET_URL + image.key
        assert store.calls == [("put", image.key)]

    def test_random_key_without_owner(self) -> None:
        image = ImageLifecycleManager(RecordingStore()).create_image(b"abc", "image/png")

        assert image is not None
        assert re.match(r"^suppliers/\d+-[0-9a-f]{16}\.png$", image.key)

    def test_unset_bucket_makes_no_calls(self) -> None:
        store = RecordingStore(bucket=None)

        with pytest.raises(ConfigurationError):
            ImageLifecycleManager(store).create_image(b"abc", "image/jpeg", 1)

        assert store.calls == []

    def test_put_failure_propagates(self) -> None:
        store = RecordingStore(put_exc=access_denied())

        with pytest.raises(StoreError):
            ImageLifecycleManager(store).create_image(b"abc", "image/jpeg", 1)


class TestUpdateImage:
    def test_deletes_old_before_put(self) -> None:
        store = RecordingStore()
        store.objects["suppliers/42-1000.jpg"] = b"old"

        result = ImageLifecycleManager(store).update_image(
            BUCKET_URL + "suppliers/42-1000.jpg", b"new", "image/png", 42
        )

        assert result is not None
        assert store.calls[0] == ("delete", "suppliers/42-1000.jpg")
        assert store.calls[1][0] == "put"
        assert re.match(r"^suppliers/42-\d+\.png$", result.image.key)
        assert result.cleanup.attempted
        assert result.cleanup.succeeded
        assert "suppliers/42-1000.jpg" not in store.objects

    def test_delete_failure_still_uploads(self) -> None:
        store = RecordingStore(delete_exc=access_denied())

        result = ImageLifecycleManager(store).update_image(
            BUCKET_URL + "suppliers/42-1000.jpg", b"new", "image/jpeg", 42
        )

        assert result is not None
        assert [name for name, _ in store.calls] == ["delete", "put"]
        assert not result.cleanup.succeeded
        assert result.cleanup.error is not None
        assert result.cleanup.error.code == "AccessDenied"
        assert result.cleanup.summary()["error"]["code"] == "AccessDenied"

    def test_no_old_url_skips_delete(self) -> None:
        store = RecordingStore()

        result = ImageLifecycleManager(store).update_image(None, b"new", "image/jpeg", 42)

        assert result is not None
        assert [name for name, _ in store.calls] == ["put"]
        assert result.cleanup.attempted is False
        assert result.cleanup.succeeded

    def test_empty_body_leaves_old_object(self) -> None:
        store = RecordingStore()

        result = ImageLifecycleManager(store).update_image(
            BUCKET_URL + "suppliers/42-1000.jpg", b"", "image/jpeg", 42
        )

        assert result is None
        assert store.calls == []

    def test_unset_bucket_makes_no_calls(self) -> None:
        store = RecordingStore(bucket=None)

        with pytest.raises(ConfigurationError):
            ImageLifecycleManager(store).update_image(
                BUCKET_URL + "suppliers/42-1000.jpg", b"new", "image/jpeg", 42
            )

        assert store.calls == []

    @pytest.mark.parametrize("body", [b"", None])
    def test_unset_bucket_with_empty_body(self, body) -> None:
        store = RecordingStore(bucket=None)

        with pytest.raises(ConfigurationError):
            ImageLifecycleManager(store).update_image(
                BUCKET_URL + "suppliers/42-1000.jpg", body, "image/png", 42
            )

        assert store.calls == []

    def test_put_failure_after_delete_propagates(self) -> None:
        store = RecordingStore(put_exc=access_denied())
        store.objects["suppliers/42-1000.jpg"] = b"old"

        with pytest.raises(StoreError):
            ImageLifecycleManager(store).update_image(
                BUCKET_URL + "suppliers/42-1000.jpg", b"new", "image/jpeg", 42
            )

        assert "suppliers/42-1000.jpg" not in store.objects


class TestRemoveImage:
    def test_remove(self) -> None:
        store = RecordingStore()
        store.objects["suppliers/42-1000.jpg"] = b"old"

        outcome = ImageLifecycleManager(store).remove_image(BUCKET_URL + "suppliers/42-1000.jpg")

        assert outcome.key == "suppliers/42-1000.jpg"
        assert outcome.attempted
        assert store.objects == {}

    def test_remove_is_idempotent(self) -> None:
        store = RecordingStore()
        manager = ImageLifecycleManager(store)
        url = BUCKET_URL + "suppliers/42-1000.jpg"

        manager.remove_image(url)
        outcome = manager.remove_image(url)

        assert outcome.succeeded
        assert store.calls == [
            ("delete", "suppliers/42-1000.jpg"),
            ("delete", "suppliers/42-1000.jpg"),
        ]

    def test_unresolvable_url_makes_no_calls(self) -> None:
        store = RecordingStore()

        outcome = ImageLifecycleManager(store).remove_image("not-a-valid-url")

        assert outcome.attempted is False
        assert store.calls == []

    def test_unset_bucket(self) -> None:
        store = RecordingStore(bucket=None)

        with pytest.raises(ConfigurationError):
            ImageLifecycleManager(store).remove_image(BUCKET_URL + "suppliers/1-1.jpg")

        assert store.calls == []

    def test_delete_failure_propagates(self) -> None:
        store = RecordingStore(delete_exc=access_denied())

        with pytest.raises(StoreError):
            ImageLifecycleManager(store).remove_image(BUCKET_URL + "suppliers/1-1.jpg")


class TestListImages:
    def test_lists_only_owner_images(self) -> None:
        store = RecordingStore()
        store.objects.update(
            {
                "suppliers/7-1000.jpg": b"a",
                "suppliers/7-2000.png": b"bb",
                "suppliers/70-1000.jpg": b"c",
                "suppliers/8-1000.jpg": b"d",
            }
        )

        images = ImageLifecycleManager(store).list_images(7)

        assert [image.key for image in images] == ["suppliers/7-1000.jpg", "suppliers/7-2000.png"]
        assert images[1].url == BUCKET_URL + "suppliers/7-2000.png"
        assert images[1].size == 2
        assert store.calls == [("list", "suppliers/7-")]

    def test_two_creates_list_as_two(self) -> None:
        manager = ImageLifecycleManager(RecordingStore())

        with patch("core.utils.keys.current_time_millis", side_effect=[1000, 2000]):
            manager.create_image(b"a", "image/jpeg", 7)
            manager.create_image(b"b", "image/jpeg", 7)

        images = manager.list_images(7)

        assert len(images) == 2
        assert all(image.key.startswith("suppliers/7-") for image in images)

    def test_no_images(self) -> None:
        assert ImageLifecycleManager(RecordingStore()).list_images(5) == []


class TestImageLifecycleWithS3:
    def test_create_update_list_remove(self, s3_bucket, s3_keys, s3_get_object) -> None:
        manager = ImageLifecycleManager()

        with patch("core.utils.keys.current_time_millis", return_value=1000):
            first = manager.create_image(b"first", "image/jpeg", 42)
        assert first is not None
        assert first.key == "suppliers/42-1000.jpg"

        with patch("core.utils.keys.current_time_millis", return_value=2000):
            result = manager.update_image(first.url, b"second", "image/png", 42)
        assert result is not None
        assert result.cleanup.succeeded

        assert s3_keys() == ["suppliers/42-2000.png"]
        assert s3_get_object("suppliers/42-2000.png") == b"second"
        assert [image.key for image in manager.list_images(42)] == ["suppliers/42-2000.png"]
        assert manager.image_exists("suppliers/42-2000.png")

        manager.remove_image(result.image.url)

        assert s3_keys() == []
        assert manager.list_images(42) == []

    def test_unset_bucket_raises(self, s3_bucket, app_settings) -> None:
        app_settings.apply({"S3_BUCKET": ""})

        with pytest.raises(ConfigurationError):
            ImageLifecycleManager().create_image(b"abc", "image/jpeg", 1)

    def test_update_with_empty_body_and_unset_bucket_raises(self, s3_bucket, app_settings) -> None:
        app_settings.apply({"S3_BUCKET": ""})

        with pytest.raises(ConfigurationError):
            ImageLifecycleManager().update_image(
                BUCKET_URL + "suppliers/42-1000.jpg", b"", "image/png", 42
            )
