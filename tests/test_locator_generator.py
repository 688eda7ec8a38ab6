from smartlocator.code_formatter import can_render
from smartlocator.locator_generator import generate_locators_for_node, infer_role
from smartlocator.models import DEFAULT_THRESHOLDS, ElementNode, GeneratorConfig, HeuristicThresholds, Locator, PriorityLevel
from smartlocator.tool_profiles import TOOL_LANGUAGES


def _config(tool: str = "selenium", language: str = "java", **overrides) -> GeneratorConfig:
    return GeneratorConfig(tool=tool, language=language, **overrides)  # type: ignore[arg-type]


def _by_value(locators: list[Locator]) -> dict[str, Locator]:
    return {item.value: item for item in locators}


def _button() -> ElementNode:
    return ElementNode(tag="button", attributes={"id": "submit-btn"}, text="Login")


def test_robust_id_yields_id_and_tag_id_css() -> None:
    locators = generate_locators_for_node(_button(), _config())
    values = _by_value(locators)

    assert values["#submit-btn"].method == "id"
    assert values["#submit-btn"].stability == "High"
    assert values["#submit-btn"].code_snippet == 'driver.findElement(By.id("submit-btn"));'
    assert values["button#submit-btn"].method == "css"
    assert values["button#submit-btn"].stability == "High"
    assert locators[0].value == "#submit-btn"


def test_text_xpath_variants_for_clean_leaf() -> None:
    values = _by_value(generate_locators_for_node(_button(), _config()))

    exact = values["//button[text()='Login']"]
    assert exact.stability == "High"
    assert exact.priority == PriorityLevel.XPATH_TEXT
    assert values["//button[normalize-space()='Login']"].stability == "High"
    contains = values["//button[contains(text(), 'Login')]"]
    assert contains.stability == "Medium"


def test_dynamic_id_is_low_and_sorts_last() -> None:
    node = ElementNode(tag="input", attributes={"id": "field1234", "name": "email", "type": "text"})
    for tool, language in (("selenium", "java"), ("playwright", "python"), ("cypress", "javascript")):
        locators = generate_locators_for_node(node, _config(tool, language))
        dynamic = [item for item in locators if item.value == "#field1234"]
        assert len(dynamic) == 1
        assert dynamic[0].stability == "Low"
        assert locators[-1] is dynamic[0]
        assert not any(item.value == "input#field1234" for item in locators)


def test_bare_dynamic_id_input() -> None:
    locators = generate_locators_for_node(ElementNode(tag="input", attributes={"id": "field1234"}), _config())
    assert [(item.method, item.value, item.stability) for item in locators] == [("id", "#field1234", "Low")]


def test_link_text_uses_trimmed_text() -> None:
    node = ElementNode(tag="a", attributes={"href": "/x"}, text="  Continue ")
    values = _by_value(generate_locators_for_node(node, _config()))

    link = values["Continue"]
    assert link.method == "linkText"
    assert link.stability == "Medium"
    assert link.code_snippet == 'driver.findElement(By.linkText("Continue"));'
    assert link.devtools_value == "//a[text()='Continue']"
    assert link.priority == PriorityLevel.LINK_TEXT
    assert values["a[href='/x']"].priority == PriorityLevel.CSS_ATTR
    assert values["//a[@href='/x']"].method == "xpath"


def test_long_link_text_is_skipped() -> None:
    node = ElementNode(tag="a", attributes={"href": "/x"}, text="x" * 50)
    assert not any(item.method == "linkText" for item in generate_locators_for_node(node, _config()))


def test_label_association_searches_whole_container() -> None:
    field = ElementNode(tag="input", attributes={"id": "email", "type": "email"})
    ElementNode(
        tag="form",
        children=[
            ElementNode(tag="div", children=[ElementNode(tag="label", attributes={"for": "email"}, text=" Email  address ")]),
            ElementNode(tag="div", children=[field]),
        ],
    )

    selenium = _by_value(generate_locators_for_node(field, _config()))
    label_xpath = selenium["//label[normalize-space()='Email address']/following::input[1]"]
    assert label_xpath.priority == PriorityLevel.XPATH_LABEL
    assert label_xpath.stability == "High"

    playwright = _by_value(generate_locators_for_node(field, _config("playwright", "javascript")))
    label = playwright["Email  address"]
    assert label.method == "label"
    assert label.priority == PriorityLevel.LABEL_FOR
    assert label.code_snippet == "page.getByLabel('Email  address')"


def test_missing_or_empty_label_suppresses_strategy() -> None:
    field = ElementNode(tag="input", attributes={"id": "email"})
    ElementNode(tag="form", children=[ElementNode(tag="label", attributes={"for": "email"}, text="  "), field])
    locators = generate_locators_for_node(field, _config())
    assert not any("following::" in item.value for item in locators)


def test_class_strategies_skip_generated_tokens() -> None:
    node = ElementNode(tag="button", attributes={"class": "btn btn-primary css-1x2y3z abcdefghijklmnopq"}, text="Save")
    values = _by_value(generate_locators_for_node(node, _config()))

    assert values["button.btn"].stability == "Medium"
    assert values["button.btn-primary"].stability == "Medium"
    assert values["button.btn.btn-primary"].stability == "High"
    assert values["//button[text()='Save' and contains(@class, 'btn')]"].priority == PriorityLevel.XPATH_COMPLEX
    assert not any("css-1x2y3z" in value or "abcdefghijklmnopq" in value for value in values)


def test_single_class_has_no_combined_selector() -> None:
    node = ElementNode(tag="span", attributes={"class": "badge badge"}, text="New")
    css = [item.value for item in generate_locators_for_node(node, _config()) if item.method == "css"]
    assert css == ["span.badge"]


def test_attribute_strategies_emit_css_and_xpath() -> None:
    node = ElementNode(
        tag="button",
        attributes={
            "data-testid": "save",
            "style": "color: red",
            "data-v-7ba5bd90": "",
            "data-tracking": "x" * 40,
            "title": "Save changes",
        },
    )
    values = _by_value(generate_locators_for_node(node, _config()))

    test_id = values["button[data-testid='save']"]
    assert test_id.priority == PriorityLevel.CSS_ID
    assert test_id.stability == "High"
    assert values["//button[@data-testid='save']"].stability == "Medium"
    assert values["button[title='Save changes']"].priority == PriorityLevel.CSS_ATTR
    assert values["//button[@title='Save changes']"].priority == PriorityLevel.XPATH_COMPLEX
    assert not any("style" in value or "data-v-" in value or "data-tracking" in value for value in values)


def test_cypress_puts_test_id_first() -> None:
    node = ElementNode(tag="button", attributes={"data-cy": "save", "class": "btn"}, text="Save")
    locators = generate_locators_for_node(node, _config("cypress", "javascript"))
    assert locators[0].value == "button[data-cy='save']"
    assert locators[0].code_snippet == "cy.get('button[data-cy=\\'save\\']')"


def test_nested_text_uses_dot_contains_and_no_exact_match() -> None:
    node = ElementNode(tag="div", text="Hello world", children=[ElementNode(tag="span", text="world")])
    values = _by_value(generate_locators_for_node(node, _config()))

    assert "//div[contains(., 'Hello world')]" in values
    assert "//div[normalize-space()='Hello world']" in values
    assert "//div[text()='Hello world']" not in values


def test_multiline_text_skips_exact_match() -> None:
    node = ElementNode(tag="p", text="\n  Welcome back\n")
    values = _by_value(generate_locators_for_node(node, _config()))
    assert "//p[text()='Welcome back']" not in values
    assert "//p[normalize-space()='Welcome back']" in values
    assert "//p[contains(text(), 'Welcome back')]" in values


def test_excluded_tags_get_no_text_xpath() -> None:
    node = ElementNode(tag="script", text="var x = 1;")
    assert generate_locators_for_node(node, _config()) == []


def test_role_inference() -> None:
    assert infer_role(ElementNode(tag="button")) == "button"
    assert infer_role(ElementNode(tag="input", attributes={"type": "submit"})) == "button"
    assert infer_role(ElementNode(tag="input")) == "textbox"
    assert infer_role(ElementNode(tag="input", attributes={"type": "password"})) == "input"
    assert infer_role(ElementNode(tag="input", attributes={"type": "checkbox"})) == "checkbox"
    assert infer_role(ElementNode(tag="a", attributes={"href": "/"})) == "link"
    assert infer_role(ElementNode(tag="a")) == "a"
    assert infer_role(ElementNode(tag="h3")) == "heading"
    assert infer_role(ElementNode(tag="div", attributes={"onclick": "go()"})) == "button"
    assert infer_role(ElementNode(tag="div", attributes={"role": "tab"})) == "tab"


def test_playwright_role_and_placeholder_locators() -> None:
    button = generate_locators_for_node(ElementNode(tag="button", text="Login"), _config("playwright", "python"))
    assert button[0].method == "role"
    assert button[0].value == 'Role: button, Name: "Login"'
    assert button[0].code_snippet == 'page.get_by_role("button", name="Login")'

    search = ElementNode(tag="input", attributes={"placeholder": "Search"})
    values = _by_value(generate_locators_for_node(search, _config("playwright", "python")))
    assert values['Role: textbox, Name: "Search"'].code_snippet == 'page.get_by_role("textbox", name="Search")'
    assert values["Search"].method == "placeholder"
    assert values["Search"].code_snippet == 'page.get_by_placeholder("Search")'


def test_nameless_checkbox_still_gets_role() -> None:
    node = ElementNode(tag="input", attributes={"type": "checkbox"})
    values = _by_value(generate_locators_for_node(node, _config("playwright", "typescript")))
    assert values["Role: checkbox"].code_snippet == "page.getByRole('checkbox')"


def test_nameless_button_gets_no_role() -> None:
    node = ElementNode(tag="button", children=[ElementNode(tag="svg")])
    assert not any(item.method == "role" for item in generate_locators_for_node(node, _config("playwright", "java")))


def test_role_strategies_are_playwright_only() -> None:
    node = ElementNode(tag="input", attributes={"placeholder": "Search"})
    methods = {item.method for item in generate_locators_for_node(node, _config())}
    assert "role" not in methods
    assert "placeholder" not in methods


def test_generated_methods_are_renderable_for_every_pair() -> None:
    field = ElementNode(tag="input", attributes={"id": "email", "name": "email", "placeholder": "Email"})
    ElementNode(tag="form", children=[ElementNode(tag="label", attributes={"for": "email"}, text="Email"), field])
    link = ElementNode(tag="a", attributes={"href": "/x", "class": "nav-link"}, text="Continue")

    for tool, languages in TOOL_LANGUAGES.items():
        for language in languages:
            for node in (field, link):
                for item in generate_locators_for_node(node, _config(tool, language)):
                    assert can_render(tool, item.method, language), (tool, language, item.method)


def test_generation_is_idempotent_and_ids_are_deterministic() -> None:
    node = ElementNode(tag="button", attributes={"id": "save", "class": "btn primary", "name": "save"}, text="Save")
    first = generate_locators_for_node(node, _config(), node_index=3)
    second = generate_locators_for_node(node, _config(), node_index=3)

    assert [(i.method, i.value, i.priority, i.stability) for i in first] == [
        (i.method, i.value, i.priority, i.stability) for i in second
    ]
    assert [item.id for item in first] == [item.id for item in second]
    assert all(item.id.startswith("3:") for item in first)
    assert len({item.id for item in first}) == len(first)


def test_element_name_and_localized_descriptions() -> None:
    locators = generate_locators_for_node(_button(), _config(ui_locale="vi"))
    assert all(item.element_name == 'Button "Login"' for item in locators)
    assert locators[0].description == "Nhanh & ổn định nhất. Ưu tiên số 1."


def _values(tag: str, text: str, tool: str = "selenium", language: str = "java") -> list[str]:
    node = ElementNode(tag=tag, text=text)
    return [item.value for item in generate_locators_for_node(node, _config(tool, language))]


def test_default_thresholds() -> None:
    thresholds = DEFAULT_THRESHOLDS
    assert thresholds.link_text_max == 50
    assert thresholds.attribute_value_max == 40
    assert thresholds.normalized_text_max == 200
    assert thresholds.contains_text_min == 2
    assert thresholds.contains_text_max == 100
    assert thresholds.contains_prefix_length == 25
    assert thresholds.role_name_max == 30
    assert thresholds.element_name_text_max == 20
    assert thresholds.important_attributes == (
        "placeholder",
        "name",
        "type",
        "data-testid",
        "data-cy",
        "role",
        "title",
        "alt",
        "for",
        "href",
        "src",
        "value",
        "aria-label",
    )


def test_contains_match_length_bounds() -> None:
    assert not any("contains(" in value for value in _values("span", "Ok"))
    assert "//span[contains(text(), 'Yes')]" in _values("span", "Yes")
    assert any("contains(" in value for value in _values("span", "x" * 99))
    assert not any("contains(" in value for value in _values("span", "x" * 100))


def test_contains_match_uses_prefix() -> None:
    values = _values("span", "y" * 60)
    assert f"//span[contains(text(), '{'y' * 25}')]" in values


def test_normalized_space_length_bound() -> None:
    assert f"//span[normalize-space()='{'x' * 199}']" in _values("span", "x" * 199)
    assert not any("normalize-space()" in value for value in _values("span", "x" * 200))


def test_link_text_just_under_limit_is_kept() -> None:
    node = ElementNode(tag="a", attributes={"href": "/x"}, text="x" * 49)
    links = [item for item in generate_locators_for_node(node, _config()) if item.method == "linkText"]
    assert [item.value for item in links] == ["x" * 49]


def test_role_name_length_bound() -> None:
    short = _values("button", "x" * 29, "playwright", "javascript")
    assert f'Role: button, Name: "{"x" * 29}"' in short
    assert not any(value.startswith("Role:") for value in _values("button", "x" * 30, "playwright", "javascript"))


def test_custom_thresholds_change_generation() -> None:
    config = _config(thresholds=HeuristicThresholds(link_text_max=10))
    short = ElementNode(tag="a", attributes={"href": "/x"}, text="Continue")
    long = ElementNode(tag="a", attributes={"href": "/x"}, text="Continue now")
    assert any(item.method == "linkText" for item in generate_locators_for_node(short, config))
    assert not any(item.method == "linkText" for item in generate_locators_for_node(long, config))


def test_css_unsafe_id_uses_attribute_selector() -> None:
    node = ElementNode(tag="input", attributes={"id": "loginForm:email"})

    selenium = _by_value(generate_locators_for_node(node, _config()))
    assert selenium["[id='loginForm:email']"].method == "id"
    assert selenium["[id='loginForm:email']"].code_snippet == 'driver.findElement(By.id("loginForm:email"));'
    assert selenium["input[id='loginForm:email']"].method == "css"
    assert selenium["input[id='loginForm:email']"].priority == PriorityLevel.CSS_ID
    assert not any("#loginForm" in value for value in selenium)

    playwright = _by_value(generate_locators_for_node(node, _config("playwright", "python")))
    assert playwright["[id='loginForm:email']"].code_snippet == "page.locator(\"[id='loginForm:email']\")"
    assert playwright["input[id='loginForm:email']"].code_snippet == "page.locator(\"input[id='loginForm:email']\")"


def test_playwright_link_text_ranks_after_role_and_before_css() -> None:
    node = ElementNode(tag="a", attributes={"href": "/x", "class": "nav-link"}, text="Continue")
    locators = generate_locators_for_node(node, _config("playwright", "javascript"))

    assert [item.method for item in locators[:2]] == ["role", "linkText"]
    link = locators[1]
    assert link.priority == PriorityLevel.TEXT_ROLE
    assert link.code_snippet == "page.getByText('Continue', { exact: true })"
    assert all(item.method in {"css", "xpath"} for item in locators[2:])
