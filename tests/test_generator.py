from __future__ import annotations

import re
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from landingstudio.core.generator import (
    FONT_LABELS,
    font_family_from_label,
    font_link,
    generate_component_source,
    generate_document,
    sanitize,
    visible_testimonials,
)
from landingstudio.core.models import Layout, ProductRecord, Testimonial


def _record(**overrides) -> ProductRecord:
    base = dict(
        name="Aurora Lamp",
        description="Soft light for late nights.",
        price="$49",
        category="home",
        call_to_action="Buy Now",
        images=("https://img.example/one.jpg", "https://img.example/two.jpg"),
        features=("Dimmable", "USB-C"),
        testimonials=(Testimonial(author="Ana", content="Love it"),),
        primary_color="#3b82f6",
        secondary_color="#ffffff",
        font_family="Inter",
        layout=Layout.CENTERED,
    )
    base.update(overrides)
    return ProductRecord(**base)


def _hero(html: str) -> str:
    match = re.search(r'<section class="hero">(.*?)</section>', html, re.S)
    assert match is not None
    return match.group(1)


def test_sanitize_only_touches_angle_brackets() -> None:
    assert sanitize("<b>&\"'</b>") == "&lt;b&gt;&\"'&lt;/b&gt;"
    assert sanitize("") == ""
    assert sanitize(None) == ""


def test_document_is_deterministic_for_a_fixed_year() -> None:
    record = _record()
    assert generate_document(record, year=2030) == generate_document(record, year=2030)


def test_document_shell_contains_title_year_and_doctype() -> None:
    html = generate_document(_record(), year=2031)
    assert html.startswith("<!DOCTYPE html>")
    assert "<title>Aurora Lamp - Product Landing Page</title>" in html
    assert "© 2031 All Rights Reserved" in html
    assert html.count('<div class="logo">Brand</div>') == 2


def test_document_uses_current_year_by_default() -> None:
    from datetime import date

    html = generate_document(_record())
    assert f"© {date.today().year} All Rights Reserved" in html


def test_every_text_field_is_sanitized() -> None:
    record = _record(
        name="<N>",
        description="<D>",
        price="<P>",
        category="<C>",
        call_to_action="<A>",
        features=("<F>",),
        testimonials=(Testimonial(author="<W>", content="<Q>"),),
    )
    html = generate_document(record, year=2030)
    for token in "NDPCAFWQ":
        assert f"<{token}>" not in html
        assert f"&lt;{token}&gt;" in html
    assert 'alt="&lt;N&gt;"' in html


def test_image_and_color_values_are_not_sanitized() -> None:
    record = _record(images=("https://img.example/a.png?x=<1>",), primary_color="<red>")
    html = generate_document(record, year=2030)
    assert 'src="https://img.example/a.png?x=<1>"' in html
    assert "--primary-color: <red>;" in html


def test_centered_places_text_before_image() -> None:
    hero = _hero(generate_document(_record(layout=Layout.CENTERED), year=2030))
    assert hero.index("hero-content") < hero.index("hero-image")


def test_split_places_image_before_text() -> None:
    hero = _hero(generate_document(_record(layout=Layout.SPLIT), year=2030))
    assert hero.index("hero-image") < hero.index("hero-content")


def test_zigzag_orders_like_centered() -> None:
    hero = _hero(generate_document(_record(layout=Layout.ZIGZAG), year=2030))
    assert hero.index("hero-content") < hero.index("hero-image")


def _css_rule(html: str, selector: str) -> str:
    match = re.search(r"\n\s*" + re.escape(selector) + r" \{(.*?)\}", html, re.S)
    assert match is not None
    return match.group(1)


def test_centered_css_is_column_and_centered() -> None:
    html = generate_document(_record(layout=Layout.CENTERED), year=2030)
    hero = _css_rule(html, ".hero")
    assert "flex-direction: column;" in hero
    assert "justify-content: center;" in hero
    assert "text-align: center;" in hero
    assert "max-width: 700px; margin: 0 auto;" in _css_rule(html, ".hero-content")
    assert "max-width: 500px; margin: 0 auto;" in _css_rule(html, ".hero-image")


def test_split_hero_rule_is_row_aligned_left() -> None:
    hero = _css_rule(generate_document(_record(layout=Layout.SPLIT), year=2030), ".hero")
    assert "flex-direction: row;" in hero
    assert "justify-content: space-between;" in hero
    assert "text-align: left;" in hero
    assert "column" not in hero


def test_split_and_zigzag_share_identical_css() -> None:
    def style(html: str) -> str:
        return html[html.index("<style>"):html.index("</style>")]

    split = style(generate_document(_record(layout=Layout.SPLIT), year=2030))
    zigzag = style(generate_document(_record(layout=Layout.ZIGZAG), year=2030))
    assert split == zigzag
    assert "flex-direction: row;" in split
    assert "justify-content: space-between;" in split
    assert "text-align: left;" in split
    assert "max-width: 700px" not in split


def test_layout_given_as_string_is_accepted() -> None:
    html = generate_document(_record(layout="split"), year=2030)
    hero = _hero(html)
    assert hero.index("hero-image") < hero.index("hero-content")


def test_no_images_means_no_img_in_hero() -> None:
    hero = _hero(generate_document(_record(images=()), year=2030))
    assert "<img" not in hero
    assert "hero-image" not in hero


def test_only_first_image_is_used() -> None:
    html = generate_document(_record(images=("u1", "u2")), year=2030)
    assert 'src="u1"' in html
    assert "u2" not in html


def test_features_empty_omits_section() -> None:
    html = generate_document(_record(features=()), year=2030)
    assert "Key Features" not in html
    assert 'class="feature"' not in html


def test_feature_cards_are_numbered_regardless_of_text() -> None:
    html = generate_document(_record(features=("a", "b")), year=2030)
    assert html.count('<div class="feature">') == 2
    assert '<div class="feature-title">Feature 1</div>' in html
    assert '<div class="feature-title">Feature 2</div>' in html
    assert "Feature 3" not in html


def test_empty_feature_text_still_renders_card() -> None:
    html = generate_document(_record(features=("",)), year=2030)
    assert html.count('<div class="feature">') == 1
    assert "<p></p>" in html


def test_empty_testimonial_omits_section() -> None:
    html = generate_document(_record(testimonials=(Testimonial("", ""),)), year=2030)
    assert "What Our Customers Say" not in html
    assert "trust-badge" not in html.split("<body>", 1)[1]


def test_single_testimonial_renders_card_and_badges() -> None:
    html = generate_document(_record(testimonials=(Testimonial(author="A", content="hi"),)), year=2030)
    assert "What Our Customers Say" in html
    assert html.count('<div class="testimonial">') == 1
    assert '<div class="testimonial-content">"hi"</div>' in html
    assert '<div class="testimonial-author">— A</div>' in html
    body = html.split("<body>", 1)[1]
    assert body.count('<div class="trust-badge">') == 3
    for badge in ("Secure Checkout", "Free Shipping", "30-Day Return"):
        assert f"<span>{badge}</span>" in body


def test_testimonial_gate_depends_on_first_entry_content() -> None:
    testimonials = (Testimonial(author="A", content=""), Testimonial(author="B", content="great"))
    html = generate_document(_record(testimonials=testimonials), year=2030)
    assert "What Our Customers Say" not in html


def test_testimonial_section_dropped_when_filter_leaves_nothing() -> None:
    testimonials = (Testimonial(author="", content="no author"), Testimonial(author="", content="x"))
    assert visible_testimonials(testimonials) == []
    html = generate_document(_record(testimonials=testimonials), year=2030)
    assert "What Our Customers Say" not in html


def test_testimonials_without_author_are_filtered_out() -> None:
    testimonials = (
        Testimonial(author="A", content="first"),
        Testimonial(author="", content="anonymous"),
        Testimonial(author="C", content="third"),
    )
    html = generate_document(_record(testimonials=testimonials), year=2030)
    assert html.count('<div class="testimonial">') == 2
    assert "anonymous" not in html


def test_known_font_emits_link() -> None:
    html = generate_document(_record(font_family="Playfair Display"), year=2030)
    assert (
        '<link rel="stylesheet" href="https://fonts.googleapis.com/css2?family=Playfair+Display:wght@400;500;700&display=swap">'
        in html
    )
    assert "--font-family: Playfair Display, system-ui, sans-serif;" in html


def test_unknown_font_has_no_link_but_is_used_verbatim() -> None:
    html = generate_document(_record(font_family="Comic Sans"), year=2030)
    assert "<link" not in html
    assert "Comic Sans, system-ui, sans-serif" in html
    assert font_link("Comic Sans") == ""


def test_sparse_record_from_dict_renders() -> None:
    record = ProductRecord.from_dict({"name": "Solo"})
    html = generate_document(record, year=2030)
    assert "<h1>Solo</h1>" in html
    assert "Key Features" not in html
    assert "What Our Customers Say" not in html
    assert "None" not in html


def test_component_source_is_a_placeholder_with_the_name() -> None:
    source = generate_component_source(_record(name="Aurora Lamp"))
    assert "import React from 'react';" in source
    assert "<h1>Aurora Lamp</h1>" in source
    assert "React component code would be generated here" in source
    assert "export default ProductLandingPage;" in source
    assert "Dimmable" not in source
    assert "#3b82f6" not in source


def test_font_labels_map_back_to_families() -> None:
    for family, label in FONT_LABELS.items():
        assert font_family_from_label(label) == family
    assert font_family_from_label("Roboto") == "Roboto"


def test_typed_font_name_is_kept() -> None:
    assert font_family_from_label("  Comic Sans ") == "Comic Sans"
    assert font_family_from_label(None) == ""


def test_plain_mapping_is_accepted() -> None:
    html = generate_document({"name": "Solo", "layout": "split", "images": ["u1"]}, year=2030)
    hero = _hero(html)
    assert "<h1>Solo</h1>" in hero
    assert hero.index("hero-image") < hero.index("hero-content")
    assert "<h1>Solo</h1>" in generate_component_source({"name": "Solo"})
