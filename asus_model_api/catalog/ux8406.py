"""ASUS Zenbook DUO (2024) UX8406: vendor pages, fallback record, rules and copy."""

from __future__ import annotations

from asus_model_api.catalog import ModelProfile, VendorPages, register
from asus_model_api.schemas import DimensionsWeight, DisplaySpec, MarketingCopy, SpecRecord
from asus_model_api.services.spec_extractor import ExtractionRules, FieldTrigger, Signal

PAGES = VendorPages(
    product="https://www.asus.com/us/laptops/for-home/zenbook/asus-zenbook-duo-2024-ux8406/",
    techspec="https://www.asus.com/laptops/for-home/zenbook/asus-zenbook-duo-2024-ux8406/techspec/",
)

FALLBACK = SpecRecord(
    model="UX8406",
    family="ASUS Zenbook DUO (2024)",
    variants=["UX8406MA", "UX8406CA"],
    display=DisplaySpec(
        panels=2,
        sizes_inches='14.0" + 14.0"',
        options=['14" OLED 3K (2880x1800) 120Hz', '14" OLED FHD+ (1920x1200) 60Hz'],
        hdr="VESA HDR True Black 500, 100% DCI-P3, Pantone Validated, Touch + Pen",
    ),
    cpu_options=[
        "Intel Core Ultra 5 125H",
        "Intel Core Ultra 7 155H / 255H",
        "Intel Core Ultra 9 185H / 285H",
    ],
    ai_npu="Intel AI Boost NPU (~11–13 TOPS by variant)",
    gpu="Intel Arc Graphics (integrated)",
    memory="16GB or 32GB LPDDR5X (on-board)",
    storage="M.2 NVMe PCIe 4.0 — 512GB/1TB/2TB (single 2280 slot)",
    io_ports=["2× Thunderbolt 4", "1× USB‑A 3.2 Gen1", "1× HDMI 2.1 (TMDS)", "1× 3.5mm audio jack"],
    camera="FHD + IR (Windows Hello)",
    wireless="Wi‑Fi 6E + BT 5.3 (some variants with Wi‑Fi 7 + BT 5.4)",
    battery="75Wh, USB‑C 65W",
    dimensions_weight=DimensionsWeight(
        dimensions='≈ 12.34" × 8.58" × 0.57–0.78"',
        weight_approx="≈ 1.6–1.7 kg incl. keyboard",
    ),
    sources=PAGES.as_list(),
)

RULES = ExtractionRules(
    required_signals=(
        Signal("oled", all_of=("oled",), any_of=("2880 x 1800", "1920 x 1200")),
        Signal("connectivity", any_of=("thunderbolt", "hdmi")),
        Signal("cpu", all_of=("core ultra",)),
    ),
    field_triggers=(
        FieldTrigger(
            "display.options",
            ("2880 x 1800", "3k"),
            ('14" OLED 3K (2880x1800) up to 120Hz', '14" OLED FHD+ (1920x1200) 60Hz'),
        ),
        FieldTrigger(
            "display.hdr",
            ("true black 500", "hdr"),
            "VESA HDR True Black 500, 100% DCI-P3, Pantone Validated",
        ),
        FieldTrigger(
            "cpu_options",
            ("core ultra",),
            (
                "Intel Core Ultra 5 125H",
                "Intel Core Ultra 7 155H / 255H",
                "Intel Core Ultra 9 185H / 285H",
            ),
        ),
        FieldTrigger("gpu", ("arc",), "Intel Arc Graphics"),
        FieldTrigger("memory", ("lpddr5x",), "16GB / 32GB LPDDR5X (soldered)"),
        FieldTrigger(
            "storage",
            ("m.2", "pcie 4.0"),
            "M.2 NVMe PCIe 4.0 (up to 2TB), single slot 2280",
        ),
        FieldTrigger(
            "io_ports",
            ("thunderbolt 4", "usb 4"),
            ("2x Thunderbolt 4", "1x USB-A 3.2 Gen1", "1x HDMI 2.1 (TMDS)", "3.5mm audio jack"),
        ),
        FieldTrigger("battery", ("75wh",), "75Wh, USB-C 65W"),
        FieldTrigger(
            "wireless",
            ("wi-fi 7", "802.11be"),
            "Wi‑Fi 7 + Bluetooth 5.4 (some variants), otherwise Wi‑Fi 6E + BT 5.3",
        ),
    ),
)

MARKETING = {
    "en": MarketingCopy(
        headline='Zenbook DUO UX8406 — Dual 14" OLED productivity, anywhere',
        subheadline='Two 14" OLED panels up to 3K/120Hz, Intel Core Ultra with NPU, detachable keyboard.',
        key_benefits=[
            'Dual 14" OLED (up to 3K/120Hz) to reduce window switching and speed up workflows',
            "Intel Core Ultra with Intel Arc and AI Boost NPU for smart performance",
            "Portable setup: detachable Bluetooth keyboard, kickstand, 75Wh battery, 65W USB‑C",
            "Modern I/O: 2× TB4, HDMI 2.1, USB‑A, 3.5mm",
        ],
        short_description=(
            'UX8406 brings true dual-screen productivity anywhere. Two sharp 14" OLED panels, '
            "Intel Core Ultra with NPU, and TB4 I/O pack desktop flexibility into a portable design."
        ),
    ),
    "he": MarketingCopy(
        headline="Zenbook DUO UX8406 — פרודוקטיביות של שני מסכים, בכל מקום",
        subheadline="שני מסכי OLED בגודל 14״ (עד 3K/120Hz), מעבדי Intel Core Ultra עם NPU, ומקלדת מתנתקת.",
        key_benefits=[
            "שתי תצוגות OLED 14״ (עד 3K/120Hz) להפחתת קפיצות בין חלונות והאצת זרימות עבודה",
            "Intel Core Ultra עם Intel Arc ו‑AI Boost NPU לביצועים חכמים",
            "ניידות מלאה: מקלדת Bluetooth מתנתקת, מעמד מובנה, סוללת 75Wh וטעינת USB‑C 65W",
            "חיבורים מודרניים: 2× Thunderbolt 4, HDMI 2.1, USB‑A ושקע אודיו 3.5 מ״מ",
        ],
        short_description=(
            "ה‑UX8406 מביא חוויית עבודה של שני מסכים לכל מקום. שני פאנלי OLED 14״ חדים, "
            "Intel Core Ultra עם NPU, וחיבורי TB4 מספקים שילוב של צבעים מדויקים וניידות."
        ),
    ),
}

PROFILE = register(
    ModelProfile(
        key="UX8406",
        pages=PAGES,
        fallback=FALLBACK,
        rules=RULES,
        marketing=MARKETING,
        default_lang="he",
        image_note="URLs are linked/embedded from ASUS. Do not re-host. © ASUS",
    )
)
