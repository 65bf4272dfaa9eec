"""Tests for image metadata resolution and its cache."""
import os

import pytest

from errors import NotFound, PermissionDenied
import metadata
from metadata import read_image_meta


def test_resolves_dimensions_and_orientation(image_service, photos_dir):
    info = image_service.get_image_info("vacation/beach.jpg")

    assert info.name == "beach.jpg"
    assert info.path == "vacation/beach.jpg"
    assert (info.width, info.height) == (500, 300)
    assert info.orientation == 1
    assert info.size == (photos_dir / "vacation" / "beach.jpg").stat().st_size
    assert info.thumbnail_url == "/api/thumbnail/vacation/beach.jpg"


def test_raw_dimensions_are_reported_for_rotated_image(image_service):
    info = image_service.get_image_info("rotated.jpg")
    assert (info.width, info.height) == (400, 200)
    assert info.orientation == 6


def test_untagged_image_has_zero_orientation(photos_dir):
    assert read_image_meta(photos_dir / "vacation" / "sunset.PNG") == (64, 32, 0)


def test_undecodable_image_degrades_to_zero(image_service, photos_dir):
    info = image_service.get_image_info("broken.jpg")
    assert (info.width, info.height, info.orientation) == (0, 0, 0)
    assert read_image_meta(photos_dir / "broken.jpg") == (0, 0, 0)


def test_missing_image(image_service):
    with pytest.raises(NotFound):
        image_service.get_image_info("vacation/missing.jpg")


def test_folder_is_not_an_image(image_service):
    with pytest.raises(NotFound):
        image_service.get_image_info("vacation")


def test_traversal(image_service):
    with pytest.raises(PermissionDenied):
        image_service.get_image_info("../outside.jpg")


def test_resolution_is_memoised(image_service, photos_dir):
    first = image_service.get_image_info("vacation/beach.jpg")
    os.remove(photos_dir / "vacation" / "beach.jpg")

    assert image_service.get_image_info("vacation/beach.jpg") is first


def test_cache_is_keyed_by_requested_path(image_service):
    image_service.get_image_info("vacation/beach.jpg")
    image_service.get_image_info("vacation//beach.jpg")
    assert len(image_service.metadata) == 2


def test_list_images_skips_non_images_and_hidden(image_service):
    images = image_service.list_images("vacation")
    assert [i.name for i in images] == ["beach.jpg", "sunset.PNG"]
    assert images[1].width == 64


def test_list_images_keeps_undecodable_with_zero_metadata(image_service):
    names = [i.name for i in image_service.list_images("")]
    assert names == ["broken.jpg", "rotated.jpg"]


def test_single_open_reads_everything(photos_dir, monkeypatch):
    opened = []
    original = metadata.PILImage.open

    def counting(*args, **kwargs):
        opened.append(args[0])
        return original(*args, **kwargs)

    monkeypatch.setattr(metadata.PILImage, "open", counting)
    assert read_image_meta(photos_dir / "rotated.jpg") == (400, 200, 6)
    assert len(opened) == 1


def test_overlong_name_is_not_found(image_service):
    with pytest.raises(NotFound):
        image_service.get_image_info("vacation/" + "b" * 300 + ".jpg")
