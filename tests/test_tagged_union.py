"""Tests for the tagged-union codec and its two concrete families."""

from __future__ import annotations

import logging

import pytest

from core.domain.selection_rules import SELECTION_RULE_CODEC, ArnRule, TagRule
from core.domain.staged_extras import (
    STAGED_EXTRA_CODEC,
    BackupVaultExtra,
    KMSKeyExtra,
)
from core.domain.tagged_union import TaggedUnionCodec
from core.errors import UnknownRuleTypeError


class TestEncode:
    """Encoding always yields a JSON array of tagged objects."""

    def test_none_encodes_as_empty_array(self) -> None:
        assert SELECTION_RULE_CODEC.encode(None) == []

    def test_empty_encodes_as_empty_array(self) -> None:
        assert SELECTION_RULE_CODEC.encode([]) == []

    def test_discriminator_is_always_serialized(self) -> None:
        encoded = SELECTION_RULE_CODEC.encode([ArnRule.matching([]), TagRule.matching("env")])

        assert encoded == [
            {"ruleType": "arn", "arns": []},
            {"ruleType": "tag", "name": "env", "value": ""},
        ]

    def test_extras_keep_type_and_environment(self) -> None:
        encoded = STAGED_EXTRA_CODEC.encode([KMSKeyExtra(environment="target", kms_key_arn="arn:kms")])

        assert encoded == [{"type": "kmsKey", "environment": "target", "kmsKeyArn": "arn:kms"}]


class TestDecode:
    """Decoding picks the concrete variant per element and keeps array order."""

    def test_none_decodes_as_empty_list(self) -> None:
        assert SELECTION_RULE_CODEC.decode(None) == []

    def test_mixed_variants_keep_order_and_type(self) -> None:
        decoded = SELECTION_RULE_CODEC.decode(
            [
                {"ruleType": "tag", "name": "a", "value": "1"},
                {"ruleType": "arn", "arns": ["arn:x"]},
                {"ruleType": "tag", "name": "b", "value": ""},
            ]
        )

        assert [type(rule) for rule in decoded] == [TagRule, ArnRule, TagRule]
        assert [rule.kind for rule in decoded] == ["tag", "arn", "tag"]
        assert decoded[1].arns == ["arn:x"]
        assert decoded[2].value == ""

    def test_unknown_rule_type_is_fatal(self) -> None:
        with pytest.raises(UnknownRuleTypeError) as excinfo:
            SELECTION_RULE_CODEC.decode([{"ruleType": "arn", "arns": []}, {"ruleType": "regex"}])

        assert excinfo.value.rule_type == "regex"

    def test_missing_rule_type_is_fatal(self) -> None:
        with pytest.raises(UnknownRuleTypeError):
            SELECTION_RULE_CODEC.decode([{"arns": ["arn:x"]}])

    def test_unknown_extra_is_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        raw = [
            {"type": "backupVault", "environment": "source", "backupVaultName": "vault-a"},
            {"type": "dynamoDbExport", "environment": "source", "exportArn": "arn:ddb"},
            {"type": "kmsKey", "environment": "target", "kmsKeyArn": "arn:kms"},
        ]

        with caplog.at_level(logging.DEBUG, logger="core.domain.staged_extras"):
            decoded = STAGED_EXTRA_CODEC.decode(raw)

        assert decoded == [
            BackupVaultExtra(environment="source", backup_vault_name="vault-a"),
            KMSKeyExtra(environment="target", kms_key_arn="arn:kms"),
        ]
        assert "dynamoDbExport" in caplog.text

    def test_extra_without_type_is_skipped(self) -> None:
        decoded = STAGED_EXTRA_CODEC.decode([{"environment": "source"}])

        assert decoded == []

    def test_instances_pass_through(self) -> None:
        rule = ArnRule.matching(["arn:a"])

        decoded = SELECTION_RULE_CODEC.decode([rule])

        assert decoded[0] is rule

    def test_non_object_element_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            SELECTION_RULE_CODEC.decode(["arn"])

    def test_object_instead_of_array_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            SELECTION_RULE_CODEC.decode({"ruleType": "arn"})


class TestCodecConstruction:
    def test_requires_variants(self) -> None:
        with pytest.raises(ValueError):
            TaggedUnionCodec(discriminator="kind", variants={}, on_unknown=lambda kind, raw: None)

    def test_exposes_kinds(self) -> None:
        assert SELECTION_RULE_CODEC.discriminator == "ruleType"
        assert SELECTION_RULE_CODEC.kinds == ("arn", "tag")
        assert len(STAGED_EXTRA_CODEC.kinds) == 8
