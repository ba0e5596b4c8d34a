"""Tests for the Rule base class, the registry, and YAML declarations."""

from types import SimpleNamespace

import pytest
import yaml

from rulesets.rules.models import Rule
from rulesets.rules.registry import (
    DeclarationError,
    RuleRegistry,
    UnknownRuleError,
    identifier_for,
)
from rulesets.rules.ruleset import Ruleset, StrongRuleset


class ArticleIsPublished(Rule):
    """Article is published."""

    def satisfied(self):
        return self.subject.published

    def not_applicable(self):
        return self.subject.deleted


class TestRuleModel:
    def test_subject_is_kept(self):
        article = SimpleNamespace(published=True, deleted=False)
        assert ArticleIsPublished(article).subject is article

    def test_subject_is_required(self):
        with pytest.raises(TypeError):
            ArticleIsPublished()

    def test_satisfied_must_be_implemented(self):
        class Incomplete(Rule):
            pass

        rule = Incomplete(object())  # construction alone does not fail
        with pytest.raises(NotImplementedError):
            rule.satisfied()

    def test_defaults(self):
        class Always(Rule):
            def satisfied(self):
                return True

        rule = Always(object())
        assert rule.not_applicable() is False
        assert rule.applicable() is True
        assert rule.forceable() is True

    def test_subject_drives_facets(self):
        article = SimpleNamespace(published=True, deleted=False)
        rule = ArticleIsPublished(article)
        assert rule.satisfied() is True
        assert rule.applicable() is True

        deleted = SimpleNamespace(published=False, deleted=True)
        rule = ArticleIsPublished(deleted)
        assert rule.satisfied() is False
        assert rule.not_applicable() is True
        assert rule.applicable() is False

    def test_label_from_docstring(self):
        assert ArticleIsPublished.label() == "Article is published."

    def test_label_prefers_description(self):
        class Described(ArticleIsPublished):
            description = "Custom text"

        assert Described.label() == "Custom text"

    def test_label_not_inherited_from_docstring(self):
        class Undocumented(ArticleIsPublished):
            pass

        assert Undocumented.label() == ""


class TestIdentifiers:
    @pytest.mark.parametrize("name, expected", [
        ("HasItems", "has_items"),
        ("has_items", "has_items"),
        ("Rule1", "rule1"),
        ("HTTPCheck", "http_check"),
    ])
    def test_identifier_for(self, name, expected):
        assert identifier_for(name) == expected


class TestRuleRegistry:
    def test_register_and_resolve(self, registry: RuleRegistry):
        registry.register(ArticleIsPublished)
        assert registry.get("article_is_published") is ArticleIsPublished
        assert registry.resolve("article_is_published") is ArticleIsPublished
        assert "article_is_published" in registry
        assert len(registry) == 1

    def test_resolve_camel_case(self, registry: RuleRegistry):
        registry.register(ArticleIsPublished)
        assert registry.resolve("ArticleIsPublished") is ArticleIsPublished

    def test_register_as_decorator(self, registry: RuleRegistry):
        @registry.register
        class HasItems(Rule):
            def satisfied(self):
                return True

        @registry.register(name="payment")
        class PaymentValid(Rule):
            def satisfied(self):
                return True

        assert registry.names == ["has_items", "payment"]
        assert registry.resolve("payment") is PaymentValid
        assert HasItems.__name__ == "HasItems"

    def test_register_ruleset(self, registry: RuleRegistry):
        class Group(Ruleset):
            rule_names = ("article_is_published",)

        registry.register(Group)
        assert registry.resolve("group") is Group

    def test_reregister_replaces(self, registry: RuleRegistry):
        class First(Rule):
            pass

        class Second(Rule):
            pass

        registry.register(First, name="rule")
        registry.register(Second, name="rule")
        assert registry.resolve("rule") is Second

    def test_unknown_identifier(self, registry: RuleRegistry):
        with pytest.raises(UnknownRuleError):
            registry.resolve("missing_rule")

    def test_unknown_is_lookup_error(self, registry: RuleRegistry):
        with pytest.raises(LookupError):
            registry.resolve("missing_rule")

    def test_class_reference_passes_through(self, registry: RuleRegistry):
        assert registry.resolve(ArticleIsPublished) is ArticleIsPublished

    def test_rejects_non_rule_types(self, registry: RuleRegistry):
        with pytest.raises(TypeError):
            registry.register(dict)
        with pytest.raises(TypeError):
            registry.resolve(object)


class TestDeclarations:
    def test_load_yaml_declarations(self, tmp_path, registry, make_rule):
        make_rule("has_items")
        make_rule("payment_valid", satisfied=False)
        decl_dir = tmp_path / ".rulesets"
        decl_dir.mkdir()
        (decl_dir / "checkout.yaml").write_text(yaml.dump([
            {
                "name": "checkout",
                "description": "Ready to pay",
                "rules": ["has_items", "payment_valid"],
            },
            {
                "name": "strict_checkout",
                "strong": True,
                "rules": ["checkout", "has_items"],
            },
        ]))

        assert registry.load_declarations(decl_dir) == 2

        checkout = registry.resolve("checkout")
        assert issubclass(checkout, Ruleset)
        assert not issubclass(checkout, StrongRuleset)
        assert checkout.__name__ == "Checkout"
        assert checkout.label() == "Ready to pay"
        assert checkout.rule_names == ("has_items", "payment_valid")
        assert checkout(None).satisfied() is False

        strict = registry.resolve("strict_checkout")
        assert issubclass(strict, StrongRuleset)
        assert [type(r).__name__ for r in strict(None)] == [
            "HasItems", "PaymentValid", "HasItems",
        ]

    def test_single_mapping_file(self, tmp_path, registry, make_rule):
        make_rule("has_items")
        (tmp_path / "one.yml").write_text("name: solo\nrules: [has_items]\n")
        assert registry.load_declarations(tmp_path) == 1
        assert "solo" in registry

    def test_ignores_other_files(self, tmp_path, registry):
        (tmp_path / "notes.txt").write_text("name: nope")
        assert registry.load_declarations(tmp_path) == 0

    def test_missing_directory(self, tmp_path, registry):
        assert registry.load_declarations(tmp_path / "absent") == 0

    def test_missing_keys_raise(self, tmp_path, registry):
        (tmp_path / "bad.yaml").write_text("- name: no_rules\n")
        with pytest.raises(DeclarationError):
            registry.load_declarations(tmp_path)

    def test_invalid_yaml_raises(self, tmp_path, registry):
        (tmp_path / "bad.yaml").write_text("name: [unclosed\n")
        with pytest.raises(DeclarationError):
            registry.load_declarations(tmp_path)

    def test_rules_must_be_a_list(self, tmp_path, registry):
        (tmp_path / "bad.yaml").write_text("name: x\nrules: has_items\n")
        with pytest.raises(DeclarationError):
            registry.load_declarations(tmp_path)

    @pytest.mark.parametrize("body", [
        "name: 123\nrules: [has_items]\n",
        "name: ''\nrules: [has_items]\n",
        "name: basket\ndescription: [not, text]\nrules: [has_items]\n",
    ])
    def test_mistyped_fields_raise(self, tmp_path, registry, body):
        (tmp_path / "bad.yaml").write_text(body)
        with pytest.raises(DeclarationError):
            registry.load_declarations(tmp_path)

    def test_non_utf8_file_raises(self, tmp_path, registry):
        (tmp_path / "bad.yaml").write_bytes(b"name: caf\xe9\nrules: [x]\n")
        with pytest.raises(DeclarationError):
            registry.load_declarations(tmp_path)
