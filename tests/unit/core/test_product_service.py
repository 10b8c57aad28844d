"""Unit tests for the admin product workflow."""

from pathlib import Path

import pytest

from src.storefront.core.exceptions import ProductNotFoundError, ProductValidationError
from src.storefront.core.services.cache import HOME_PATH, PRODUCTS_PATH
from src.storefront.entities.order import Order, OrderRepository, OrderTable
from src.storefront.entities.product import ProductRepository


def _files(root: Path) -> list[Path]:
    if not root.exists():
        return []
    return [path for path in root.iterdir() if path.is_file()]


def _prime_cache(page_cache) -> None:
    page_cache.set(HOME_PATH, {"most_popular": [], "newest": []})
    page_cache.set(PRODUCTS_PATH, {"products": []})


class TestCreateProduct:
    def test_creates_unavailable_product_with_stored_assets(
        self, product_service, product_fields, asset_storage, session
    ):
        product = product_service.create_product(product_fields())

        assert product.name == "Widget"
        assert product.price_in_cents == 500
        assert product.is_available_for_purchase is False
        assert Path(product.file_path).read_bytes() == b"widget archive bytes"
        assert (
            asset_storage.public_location(product.image_path).read_bytes()
            == b"\x89PNG widget image"
        )
        assert ProductRepository(session).get(product.id) == product

    def test_availability_input_is_ignored(self, product_service, product_fields):
        product = product_service.create_product(
            product_fields(isAvailableForPurchase="true")
        )
        assert product.is_available_for_purchase is False

    def test_unsafe_characters_are_dropped_from_stored_names(
        self, product_service, product_fields, make_asset, asset_storage
    ):
        product = product_service.create_product(
            product_fields(
                file=make_asset("a\x00b.zip", b"payload"),
                image=make_asset("my\tphoto.png", b"image", "image/png"),
            )
        )

        assert Path(product.file_path).name.endswith("-ab.zip")
        assert Path(product.file_path).read_bytes() == b"payload"
        assert product.image_path.endswith("-my_photo.png")
        assert asset_storage.public_location(product.image_path).read_bytes() == b"image"

    def test_invalidates_storefront_pages(self, product_service, product_fields, page_cache):
        _prime_cache(page_cache)

        product_service.create_product(product_fields())

        assert page_cache.get(HOME_PATH) is None
        assert page_cache.get(PRODUCTS_PATH) is None

    def test_invalid_form_has_no_side_effects(
        self, product_service, product_fields, asset_storage, page_cache, session
    ):
        _prime_cache(page_cache)

        with pytest.raises(ProductValidationError) as exc_info:
            product_service.create_product(product_fields(name="", priceInCents="0"))

        assert set(exc_info.value.field_errors) == {"name", "priceInCents"}
        assert _files(asset_storage.private_root) == []
        assert _files(asset_storage.public_root) == []
        assert ProductRepository(session).list_summaries() == []
        assert page_cache.get(PRODUCTS_PATH) == {"products": []}

    def test_failed_insert_removes_written_assets(
        self, product_service, product_fields, asset_storage, monkeypatch
    ):
        def _fail(product):
            raise RuntimeError("insert failed")

        monkeypatch.setattr(product_service._products, "create", _fail)

        with pytest.raises(RuntimeError, match="insert failed"):
            product_service.create_product(product_fields())

        assert _files(asset_storage.private_root) == []
        assert _files(asset_storage.public_root) == []


class TestUpdateProduct:
    def test_keeps_assets_when_none_supplied(self, product_service, product_fields):
        created = product_service.create_product(product_fields())
        fields = product_fields(name="Gadget", description="Shiny", priceInCents="750")
        del fields["file"]
        del fields["image"]

        updated = product_service.update_product(created.id, fields)

        assert updated.name == "Gadget"
        assert updated.description == "Shiny"
        assert updated.price_in_cents == 750
        assert updated.file_path == created.file_path
        assert updated.image_path == created.image_path
        assert Path(created.file_path).exists()

    def test_replaces_supplied_assets(
        self, product_service, product_fields, make_asset, asset_storage
    ):
        created = product_service.create_product(product_fields())

        updated = product_service.update_product(
            created.id,
            product_fields(
                file=make_asset("widget-v2.zip", b"second version"),
                image=make_asset("widget-v2.png", b"second image"),
            ),
        )

        assert updated.file_path != created.file_path
        assert updated.image_path != created.image_path
        assert Path(updated.file_path).read_bytes() == b"second version"
        assert asset_storage.public_location(updated.image_path).read_bytes() == b"second image"
        assert not Path(created.file_path).exists()
        assert not asset_storage.public_location(created.image_path).exists()

    def test_replaced_asset_already_missing_is_tolerated(
        self, product_service, product_fields, make_asset
    ):
        created = product_service.create_product(product_fields())
        Path(created.file_path).unlink()

        updated = product_service.update_product(
            created.id, product_fields(file=make_asset("new.zip", b"new"), image=None)
        )

        assert Path(updated.file_path).read_bytes() == b"new"
        assert updated.image_path == created.image_path

    def test_replaced_asset_that_cannot_be_removed_is_left_behind(
        self, product_service, product_fields, make_asset, asset_storage, page_cache, monkeypatch
    ):
        created = product_service.create_product(product_fields())
        _prime_cache(page_cache)

        def _deny(file_path):
            raise PermissionError(f"cannot remove {file_path}")

        monkeypatch.setattr(asset_storage, "delete_private", _deny)

        updated = product_service.update_product(
            created.id, product_fields(file=make_asset("new.zip", b"new"), image=None)
        )

        assert product_service.get_product(created.id) == updated
        assert Path(updated.file_path).read_bytes() == b"new"
        assert Path(created.file_path).exists()
        assert page_cache.get(HOME_PATH) is None
        assert page_cache.get(PRODUCTS_PATH) is None

    def test_keeps_availability(self, product_service, product_fields):
        created = product_service.create_product(product_fields())
        product_service.set_availability(created.id, True)

        updated = product_service.update_product(created.id, product_fields(file=None, image=None))

        assert updated.is_available_for_purchase is True

    def test_unknown_product_writes_nothing(
        self, product_service, product_fields, asset_storage
    ):
        with pytest.raises(ProductNotFoundError):
            product_service.update_product("missing-id", product_fields())

        assert _files(asset_storage.private_root) == []
        assert _files(asset_storage.public_root) == []

    def test_invalid_form_leaves_row_untouched(self, product_service, product_fields):
        created = product_service.create_product(product_fields())

        with pytest.raises(ProductValidationError):
            product_service.update_product(created.id, product_fields(priceInCents="free"))

        assert product_service.get_product(created.id) == created

    def test_invalidates_storefront_pages(self, product_service, product_fields, page_cache):
        created = product_service.create_product(product_fields())
        _prime_cache(page_cache)

        product_service.update_product(created.id, product_fields(file=None, image=None))

        assert page_cache.get(HOME_PATH) is None
        assert page_cache.get(PRODUCTS_PATH) is None


class TestSetAvailability:
    def test_toggles_only_availability(self, product_service, product_fields):
        created = product_service.create_product(product_fields())

        updated = product_service.set_availability(created.id, True)

        assert updated.is_available_for_purchase is True
        assert updated.model_copy(update={"is_available_for_purchase": False}) == created

        assert product_service.set_availability(created.id, False).is_available_for_purchase is False

    def test_unknown_product(self, product_service, page_cache):
        _prime_cache(page_cache)

        with pytest.raises(ProductNotFoundError):
            product_service.set_availability("missing-id", True)

        assert page_cache.get(HOME_PATH) is not None


class TestDeleteProduct:
    def test_removes_row_and_both_assets(
        self, product_service, product_fields, asset_storage, page_cache
    ):
        created = product_service.create_product(product_fields())
        _prime_cache(page_cache)

        deleted = product_service.delete_product(created.id)

        assert deleted.id == created.id
        assert not Path(created.file_path).exists()
        assert not asset_storage.public_location(created.image_path).exists()
        assert page_cache.get(HOME_PATH) is None
        with pytest.raises(ProductNotFoundError):
            product_service.get_product(created.id)

    def test_second_delete_is_not_found(self, product_service, product_fields):
        created = product_service.create_product(product_fields())
        product_service.delete_product(created.id)

        with pytest.raises(ProductNotFoundError):
            product_service.delete_product(created.id)

    def test_orders_outlive_deleted_product(
        self, product_service, product_fields, session, db_service
    ):
        created = product_service.create_product(product_fields())
        order = OrderRepository(session).create(
            Order(price_paid_in_cents=500, customer_email="a@example.com", product_id=created.id)
        )
        session.commit()

        product_service.delete_product(created.id)

        assert product_service.list_products() == []
        with db_service.session_scope() as other:
            kept = other.get(OrderTable, order.id)
            assert kept is not None
            assert kept.product_id is None

    def test_missing_image_keeps_row_and_private_file(
        self, product_service, product_fields, asset_storage
    ):
        created = product_service.create_product(product_fields())
        asset_storage.public_location(created.image_path).unlink()

        for _ in range(2):
            with pytest.raises(FileNotFoundError, match=created.id):
                product_service.delete_product(created.id)

            assert product_service.get_product(created.id) == created
            assert Path(created.file_path).read_bytes() == b"widget archive bytes"

    def test_missing_private_file_keeps_image(
        self, product_service, product_fields, asset_storage, page_cache
    ):
        created = product_service.create_product(product_fields())
        Path(created.file_path).unlink()
        _prime_cache(page_cache)

        with pytest.raises(FileNotFoundError):
            product_service.delete_product(created.id)

        assert product_service.get_product(created.id) == created
        assert asset_storage.public_location(created.image_path).exists()
        assert page_cache.get(HOME_PATH) is not None

    def test_failed_removal_rolls_row_back(
        self, product_service, product_fields, asset_storage, monkeypatch
    ):
        created = product_service.create_product(product_fields())

        def _deny(image_path):
            raise PermissionError(f"cannot remove {image_path}")

        monkeypatch.setattr(asset_storage, "delete_public", _deny)

        with pytest.raises(PermissionError):
            product_service.delete_product(created.id)

        assert product_service.get_product(created.id) == created


class TestReadPaths:
    def test_list_products_counts_orders(self, product_service, product_fields, session):
        widget = product_service.create_product(product_fields(name="Widget"))
        product_service.create_product(product_fields(name="Gadget"))
        orders = OrderRepository(session)
        for email in ("a@example.com", "b@example.com"):
            orders.create(
                Order(price_paid_in_cents=500, customer_email=email, product_id=widget.id)
            )
        session.commit()

        summaries = product_service.list_products()

        assert [s.name for s in summaries] == ["Gadget", "Widget"]
        assert [s.order_count for s in summaries] == [0, 2]

    def test_download_location(self, product_service, product_fields):
        created = product_service.create_product(product_fields())

        product, location = product_service.download_location(created.id)

        assert product == created
        assert location.read_bytes() == b"widget archive bytes"

    def test_get_unknown_product(self, product_service):
        with pytest.raises(ProductNotFoundError) as exc_info:
            product_service.get_product("missing-id")
        assert exc_info.value.product_id == "missing-id"
