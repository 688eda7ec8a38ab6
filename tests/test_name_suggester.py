from smartlocator.models import ElementNode
from smartlocator.name_suggester import (
    UniqueNameRegistry,
    suggest_element_name,
    to_camel_case,
    to_snake_case,
    variable_name_for,
)


def _node(tag: str, text: str = "", **attributes: str) -> ElementNode:
    return ElementNode(tag=tag, attributes={key.replace("_", "-"): value for key, value in attributes.items()}, text=text)


def test_button_uses_visible_text() -> None:
    assert suggest_element_name(_node("button", "Login", id="submit-btn")) == 'Button "Login"'


def test_input_prefix_uses_type_and_placeholder_wins() -> None:
    node = _node("input", type="email", placeholder="Work email", name="email")
    assert suggest_element_name(node) == 'EMAIL Input "Work email"'


def test_name_attribute_and_stable_id_suffixes() -> None:
    assert suggest_element_name(_node("input", name="q")) == "INPUT (name=q)"
    assert suggest_element_name(_node("select", id="country")) == "SELECT (#country)"


def test_dynamic_id_is_not_used_as_suffix() -> None:
    assert suggest_element_name(_node("div", id="field1234")) == "Element"


def test_text_suffix_is_trimmed_and_limited() -> None:
    node = _node("p", "   A paragraph that keeps going for a while   ")
    assert suggest_element_name(node) == 'Text "A paragraph that kee"'


def test_prefixes_for_common_tags() -> None:
    assert suggest_element_name(_node("h2", "Welcome")) == 'Heading "Welcome"'
    assert suggest_element_name(_node("a", "Home", href="/")) == 'Link "Home"'
    assert suggest_element_name(_node("img", alt="Logo")) == "Image"
    assert suggest_element_name(_node("svg", aria_label="Close")) == 'Icon "Close"'
    assert suggest_element_name(_node("input", type="submit", role="button")) == "Button"
    assert suggest_element_name(_node("li", "Item")) == 'LI "Item"'
    assert suggest_element_name(_node("section")) == "SECTION"


def test_case_conversions() -> None:
    assert to_camel_case("Button Login") == "buttonLogin"
    assert to_snake_case("Button Login") == "button_login"
    assert to_snake_case("EMAIL Input Work email") == "email_input_work_email"


def test_variable_names_follow_language_convention() -> None:
    assert variable_name_for('Button "Login"', "java") == "buttonLogin"
    assert variable_name_for('Button "Login"', "typescript") == "buttonLogin"
    assert variable_name_for('Button "Login"', "python") == "button_login"
    assert variable_name_for('Button "Login"', "robot") == "button_login"
    assert variable_name_for('Button "Login"', "csharp") == "ButtonLogin"


def test_variable_names_fold_accents_and_fall_back() -> None:
    assert variable_name_for("Đăng nhập", "java") == "dangNhap"
    assert variable_name_for(None, "java") == "element"
    assert variable_name_for('"!!"', "python") == "element"
    assert variable_name_for("123", "python") == "e_123"


def test_unique_name_registry_appends_counter() -> None:
    registry = UniqueNameRegistry()
    assert registry.claim("login") == "login"
    assert registry.claim("login") == "login2"
    assert registry.claim("login") == "login3"
    assert registry.claim("logout") == "logout"


def test_text_suffix_truncates_at_twenty_characters() -> None:
    assert suggest_element_name(_node("p", "x" * 20)) == f'Text "{"x" * 20}"'
    assert suggest_element_name(_node("p", "x" * 21)) == f'Text "{"x" * 20}"'
    assert suggest_element_name(_node("p", "Hello world"), text_limit=5) == 'Text "Hello"'
