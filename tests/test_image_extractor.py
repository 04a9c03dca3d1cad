import pytest

from asus_model_api.services.image_extractor import classify_role, extract_images

PRODUCT_URL = "https://www.asus.com/us/laptops/for-home/zenbook/asus-zenbook-duo-2024-ux8406/"
CDN = "https://dlcdnwebimgs.asus.com/gain/4B1F"

PRODUCT_HTML = f"""
<html><body>
  <img src="/websites/global/products/hero-kv.png" alt=" Zenbook DUO ">
  <img src="{CDN}/duo-mode.webp?w=800" alt="Dual screen">
  <img src="{CDN}/banner.gif" alt="animated">
  <img src="https://ads.example.com/pixel-laptop.png" alt="tracker">
  <img src="placeholder.svg" data-src="//dlcdnwebimgs.asus.com/gain/4B1F/kickstand.jpg">
  <picture>
    <source srcset="{CDN}/pen-1x.jpg 1x, {CDN}/pen-2x.jpg 2x">
    <source srcset="{CDN}/pen-anim.gif">
  </picture>
  <img src="/websites/global/products/hero-kv.png" alt="repeat">
  <img alt="no source">
</body></html>
"""


def test_extract_images_filters_resolves_and_dedupes() -> None:
    images = extract_images(PRODUCT_HTML, PRODUCT_URL)

    assert [(img.url, img.alt, img.role) for img in images] == [
        ("https://www.asus.com/websites/global/products/hero-kv.png", "Zenbook DUO", "hero"),
        (f"{CDN}/duo-mode.webp?w=800", "Dual screen", "mode-dual-screen"),
        (f"{CDN}/kickstand.jpg", "", "kickstand"),
        (f"{CDN}/pen-1x.jpg", "", "pen"),
        (f"{CDN}/pen-2x.jpg", "", "pen"),
    ]


def test_gif_and_foreign_hosts_are_excluded() -> None:
    urls = [img.url for img in extract_images(PRODUCT_HTML, PRODUCT_URL)]

    assert not any(url.endswith(".gif") for url in urls)
    assert not any("example.com" in url for url in urls)


def test_extract_images_handles_empty_and_broken_markup() -> None:
    assert extract_images("", PRODUCT_URL) == []
    assert extract_images("<div><p>no pictures here", PRODUCT_URL) == []
    assert extract_images(f"<img src='{CDN}/diagram.bmp'>", PRODUCT_URL) == []


def test_relative_paths_resolve_against_page_directory() -> None:
    html = '<img src="images/laptop-mode.JPG" alt="Laptop">'

    (image,) = extract_images(html, "https://www.asus.com/us/site/")

    assert image.url == "https://www.asus.com/us/site/images/laptop-mode.JPG"
    assert image.role == "mode-laptop"


@pytest.mark.parametrize(
    ("url", "role"),
    [
        (f"{CDN}/ux8406_kv_01.jpg", "hero"),
        (f"{CDN}/KeyVisual.png", "hero"),
        (f"{CDN}/hero-dual.png", "hero"),
        (f"{CDN}/duo-laptop.png", "mode-dual-screen"),
        (f"{CDN}/Laptop-Mode.png", "mode-laptop"),
        (f"{CDN}/desktop-mode.png", "desktop-mode"),
        (f"{CDN}/kickstand.png", "kickstand"),
        (f"{CDN}/io-ports.png", "ports"),
        (f"{CDN}/stylus-pen.png", "pen"),
        (f"{CDN}/coffee-shop.jpg", "lifestyle"),
    ],
)
def test_classify_role_first_rule_wins(url: str, role: str) -> None:
    assert classify_role(url) == role
