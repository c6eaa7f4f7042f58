"""Unit tests for the security group ingress rule verifier."""

import pytest

from infra_verify.clients.aws_client import AWSAPIError
from infra_verify.clients.terraform_outputs import TerraformOutputs
from infra_verify.exceptions import CardinalityError
from infra_verify.models import ObservedSecurityGroupRule
from infra_verify.verifiers import IngressRuleVerifier

GROUP_ID = "sg-0123456789abcdef0"
RULE_ID = "sgr-0123456789abcdef0"


def make_outputs(**overrides) -> TerraformOutputs:
    values = {
        "security_group_ingress_rule_id": RULE_ID,
        "security_group_id": GROUP_ID,
        "security_group_rule_effective_source": "cidr_ipv4:10.0.0.0/16",
    }
    values.update(overrides)
    return TerraformOutputs(values)


@pytest.fixture
def client(mock_aws_client, observed_security_group, observed_ingress_rule):
    egress = ObservedSecurityGroupRule(
        rule_id="sgr-0eeeeeeeeeeeeeeee",
        group_id=GROUP_ID,
        is_egress=True,
        ip_protocol="-1",
        cidr_ipv4="0.0.0.0/0",
    )
    mock_aws_client.describe_security_groups.return_value = [observed_security_group]
    mock_aws_client.describe_security_group_rules.return_value = [egress, observed_ingress_rule]
    return mock_aws_client


def test_cidr_ipv4_rule_passes(client, ingress_outputs, verify_settings):
    """tcp ingress from 10.0.0.0/16 with matching descriptor passes every sub-check."""
    report = IngressRuleVerifier(client, ingress_outputs, verify_settings).verify()

    assert report.passed
    assert [check.name for check in report.checks] == [
        "rule_exists",
        "rule_properties",
        "effective_source_format",
    ]
    client.describe_security_groups.assert_called_once_with([GROUP_ID])
    client.describe_security_group_rules.assert_called_once_with(GROUP_ID)


def test_group_without_ingress_permissions(client, ingress_outputs, verify_settings, observed_security_group):
    client.describe_security_groups.return_value = [
        observed_security_group.model_copy(update={"ingress_permission_count": 0})
    ]

    report = IngressRuleVerifier(client, ingress_outputs, verify_settings).verify()

    assert report.get_check("rule_exists").passed is False


def test_unknown_rule_fails_properties_only(client, verify_settings):
    outputs = make_outputs(security_group_ingress_rule_id="sgr-0000000000000000f")

    report = IngressRuleVerifier(client, outputs, verify_settings).verify()

    properties = report.get_check("rule_properties")
    assert properties.passed is False
    assert len(properties.failures) == 1
    assert "not found" in properties.failures[0]
    assert report.get_check("rule_exists").passed
    assert report.get_check("effective_source_format").passed


def test_egress_rule_rejected(client, verify_settings):
    outputs = make_outputs(security_group_ingress_rule_id="sgr-0eeeeeeeeeeeeeeee")

    report = IngressRuleVerifier(client, outputs, verify_settings).verify()

    failures = report.get_check("rule_properties").failures
    assert failures == ["Rule sgr-0eeeeeeeeeeeeeeee is an egress rule, expected ingress"]


def test_rule_without_protocol_or_source(client, ingress_outputs, verify_settings, observed_security_group):
    client.describe_security_group_rules.return_value = [
        ObservedSecurityGroupRule(rule_id=RULE_ID, group_id=GROUP_ID, is_egress=False, ip_protocol="")
    ]

    report = IngressRuleVerifier(client, ingress_outputs, verify_settings).verify()

    assert len(report.get_check("rule_properties").failures) == 2


@pytest.mark.parametrize("source", [
    {"cidr_ipv6": "::/0"},
    {"prefix_list_id": "pl-12345678"},
    {"referenced_group_id": "sg-0aaaaaaaaaaaaaaaa"},
    {"cidr_ipv4": "10.0.0.0/16", "cidr_ipv6": "::/0"},
])
def test_any_source_is_enough(client, ingress_outputs, verify_settings, source):
    client.describe_security_group_rules.return_value = [
        ObservedSecurityGroupRule(rule_id=RULE_ID, group_id=GROUP_ID, ip_protocol="tcp", **source)
    ]

    report = IngressRuleVerifier(client, ingress_outputs, verify_settings).verify()

    assert report.get_check("rule_properties").passed


@pytest.mark.parametrize("descriptor", [
    "cidr_ipv4:10.0.0.0/16",
    "cidr_ipv6:::/0",
    "prefix_list:pl-12345678",
    "security_group:sg-0aaaaaaaaaaaaaaaa",
])
def test_recognised_descriptors(client, verify_settings, descriptor):
    outputs = make_outputs(security_group_rule_effective_source=descriptor)

    report = IngressRuleVerifier(client, outputs, verify_settings).verify()

    assert report.get_check("effective_source_format").passed


@pytest.mark.parametrize("descriptor", ["", "10.0.0.0/16", "ipv4:10.0.0.0/16", "CIDR_IPV4:10.0.0.0/16"])
def test_unrecognised_descriptors(client, verify_settings, descriptor):
    outputs = make_outputs(security_group_rule_effective_source=descriptor)

    report = IngressRuleVerifier(client, outputs, verify_settings).verify()

    assert report.get_check("effective_source_format").passed is False
    assert report.get_check("rule_properties").passed


def test_missing_group_aborts(client, ingress_outputs, verify_settings):
    client.describe_security_groups.return_value = []

    with pytest.raises(CardinalityError):
        IngressRuleVerifier(client, ingress_outputs, verify_settings).verify()
    client.describe_security_group_rules.assert_not_called()


def test_describe_error_aborts(client, ingress_outputs, verify_settings):
    client.describe_security_group_rules.side_effect = AWSAPIError("UnauthorizedOperation")

    with pytest.raises(AWSAPIError):
        IngressRuleVerifier(client, ingress_outputs, verify_settings).verify()
