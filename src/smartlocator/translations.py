from __future__ import annotations

DEFAULT_LOCALE = "en"

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "id_robust": "Fastest & most stable. Preferred best practice.",
        "id_dynamic": "Warning: ID looks dynamic/generated. May break on next run.",
        "name": "Very fast. Second best option for Form elements.",
        "link_text": "Best for <a> tags. Matches exact link text.",
        "css_id": "High performance CSS selector using ID.",
        "css_class": "Good if class names are meaningful and unique.",
        "css_class_multi": "More specific combination of classes.",
        "css_attr": "Targeting '{attr}'. Good alternative if ID is missing.",
        "xpath_text": "Robust. Uses normalize-space() to ignore newlines/whitespace.",
        "xpath_text_exact": "Exact match. Simple and effective for clean text.",
        "xpath_text_class": "Highly specific: Matches both text and class.",
        "xpath_contains": "Flexible. Matches partial text content.",
        "xpath_contains_nested": "Flexible. Matches partial text content. (Nested)",
        "xpath_attr": "Fallback attribute selection.",
        "xpath_label": "Robust Form Strategy. Locates input via its Label text.",
        "role": "Accessible role query. Mirrors how users perceive the element.",
        "placeholder": "Matches the input placeholder text.",
        "duplicate": "(Duplicate #{index})",
        "duplicate_xpath": "[Converted to XPath for indexing]",
        "duplicate_nth_of_type": "[Warning: :nth-of-type depends on tag structure]",
        "duplicate_manual": "[Manual indexing required]",
    },
    "vi": {
        "id_robust": "Nhanh & ổn định nhất. Ưu tiên số 1.",
        "id_dynamic": "Cảnh báo: ID có vẻ là động (sinh tự động). Dễ gây lỗi script.",
        "name": "Rất nhanh. Ưu tiên số 2 cho các phần tử Form.",
        "link_text": "Tốt nhất cho thẻ <a>. Tìm theo nội dung link.",
        "css_id": "Hiệu năng cao. CSS Selector dựa trên ID.",
        "css_class": "Tốt nếu tên class có ý nghĩa và duy nhất.",
        "css_class_multi": "Kết hợp nhiều class để tăng độ chính xác.",
        "css_attr": "Dùng thuộc tính '{attr}'. Giải pháp thay thế tốt.",
        "xpath_text": "Mạnh mẽ. Dùng normalize-space() để xử lý khoảng trắng/xuống dòng.",
        "xpath_text_exact": "Chính xác tuyệt đối. Ngắn gọn, hiệu quả khi văn bản sạch.",
        "xpath_text_class": "Rất cụ thể: Khớp cả văn bản và class.",
        "xpath_contains": "Linh hoạt. Khớp một phần nội dung văn bản.",
        "xpath_contains_nested": "Linh hoạt. Khớp một phần nội dung văn bản. (Lồng nhau)",
        "xpath_attr": "Dùng XPath với thuộc tính (Fallback).",
        "xpath_label": "Chiến lược Form ổn định. Tìm Input dựa theo nhãn (Label) của nó.",
        "role": "Truy vấn theo vai trò (role). Giống cách người dùng nhận biết phần tử.",
        "placeholder": "Tìm theo nội dung placeholder của ô nhập liệu.",
        "duplicate": "(Trùng lặp #{index})",
        "duplicate_xpath": "[Đã chuyển sang XPath để đánh chỉ số]",
        "duplicate_nth_of_type": "[Cảnh báo: :nth-of-type phụ thuộc cấu trúc thẻ]",
        "duplicate_manual": "[Cần đánh chỉ số thủ công]",
    },
}

SUPPORTED_LOCALES = frozenset(MESSAGES)


def message(locale: str | None, key: str, **params: object) -> str:
    table = MESSAGES.get((locale or "").strip().lower(), MESSAGES[DEFAULT_LOCALE])
    template = table.get(key) or MESSAGES[DEFAULT_LOCALE][key]
    return template.format(**params) if params else template
