#!/usr/bin/env python3
"""Tests for normalized-to-page coordinate mapping"""

import math

from docsign.utils.coordinates import AbsoluteRect, clamp_rect, fit_and_center, map_normalized_rect


def test_top_anchored_field_is_flipped():
    """A field at the top of the editor lands near the top of the PDF page"""
    rect = map_normalized_rect(600, 800, 0.0, 0.0, 0.5, 0.1)

    assert rect.height == 80
    assert rect.y == 720  # 800 - 0 - 80
    print("[PASS] top-anchored flip test passed")


def test_mapping_scales_each_axis_by_its_own_dimension():
    """x/w scale with page width, y/h with page height"""
    rect = map_normalized_rect(612, 792, 0.25, 0.5, 0.5, 0.25)

    assert rect.x == 153
    assert rect.width == 306
    assert rect.height == 198
    assert rect.y == 792 - 396 - 198
    print("[PASS] per-axis scaling test passed")


def test_bottom_field_lands_at_origin():
    """A field touching the bottom edge maps to y=0"""
    rect = map_normalized_rect(612, 792, 0.1, 0.9, 0.2, 0.1)

    assert math.isclose(rect.y, 0.0, abs_tol=1e-9)
    print("[PASS] bottom edge test passed")


def test_degenerate_input_is_not_clamped():
    """The mapper passes negative sizes through untouched"""
    rect = map_normalized_rect(100, 100, 0.5, 0.5, -0.2, -0.1)

    assert rect.width == -20
    assert rect.height == -10
    assert rect.y == 60
    print("[PASS] degenerate input test passed")


def test_clamp_rect_zeroes_negative_sizes():
    """clamp_rect keeps the origin but drops negative sizes to zero"""
    clamped = clamp_rect(AbsoluteRect(10, 20, -5, -1))

    assert clamped == AbsoluteRect(10, 20, 0.0, 0.0)
    assert clamp_rect(AbsoluteRect(1, 2, 3, 4)) == AbsoluteRect(1, 2, 3, 4)
    print("[PASS] clamp_rect test passed")


def test_fit_and_center_wide_image_in_tall_box():
    """A 2:1 image in a 100x100 box is width-bound and vertically centered"""
    target = fit_and_center(AbsoluteRect(0, 0, 100, 100), 200, 100)

    assert target.width == 100
    assert target.height == 50
    assert target.x == 0
    assert target.y == 25
    assert math.isclose(target.width / target.height, 200 / 100)
    print("[PASS] wide image fit test passed")


def test_fit_and_center_tall_image_in_wide_box():
    """A 1:3 image in a 300x60 box is height-bound and horizontally centered"""
    target = fit_and_center(AbsoluteRect(50, 10, 300, 60), 40, 120)

    assert target.height == 60
    assert target.width == 20
    assert target.x == 50 + (300 - 20) / 2
    assert target.y == 10
    print("[PASS] tall image fit test passed")


def test_fit_and_center_empty_content():
    """Zero-sized content yields a zero-sized target instead of dividing by zero"""
    target = fit_and_center(AbsoluteRect(5, 5, 100, 100), 0, 50)

    assert target.width == 0 and target.height == 0
    print("[PASS] empty content fit test passed")


if __name__ == "__main__":
    print("Running coordinate tests...")
    print()

    test_top_anchored_field_is_flipped()
    test_mapping_scales_each_axis_by_its_own_dimension()
    test_bottom_field_lands_at_origin()
    test_degenerate_input_is_not_clamped()
    test_clamp_rect_zeroes_negative_sizes()
    test_fit_and_center_wide_image_in_tall_box()
    test_fit_and_center_tall_image_in_wide_box()
    test_fit_and_center_empty_content()

    print()
    print("[SUCCESS] All tests passed!")
