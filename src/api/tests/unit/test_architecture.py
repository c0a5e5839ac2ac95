"""Architecture tests using pytest-archon.

These tests enforce DDD architectural boundaries between layers
within the IAM and Profiles bounded contexts.
"""

from pytest_archon import archrule


class TestDomainLayerBoundaries:
    """Tests that the domain layers have no forbidden dependencies."""

    def test_iam_domain_does_not_import_outer_layers(self):
        """The user aggregate is pure business logic.

        It should not know about repositories, services, or the web layer.
        """
        (
            archrule("iam_domain_is_pure")
            .match("iam.domain*")
            .should_not_import(
                "iam.application*",
                "iam.infrastructure*",
                "iam.presentation*",
                "infrastructure*",
            )
            .check("iam")
        )

    def test_profiles_domain_does_not_import_outer_layers(self):
        (
            archrule("profiles_domain_is_pure")
            .match("profiles.domain*")
            .should_not_import(
                "profiles.application*",
                "profiles.infrastructure*",
                "profiles.presentation*",
                "infrastructure*",
            )
            .check("profiles")
        )

    def test_domain_does_not_import_frameworks(self):
        """Domain objects should be framework-agnostic."""
        for context in ("iam", "profiles"):
            (
                archrule(f"{context}_domain_no_frameworks")
                .match(f"{context}.domain*")
                .should_not_import("fastapi*", "starlette*", "sqlalchemy*")
                .check(context)
            )


class TestPortsLayerBoundaries:
    """Tests that the ports layers have no forbidden dependencies."""

    def test_ports_do_not_import_implementations(self):
        """Ports define interfaces; they should not know concrete adapters."""
        for context in ("iam", "profiles"):
            (
                archrule(f"{context}_ports_no_implementations")
                .match(f"{context}.ports*")
                .should_not_import(
                    f"{context}.infrastructure*",
                    f"{context}.application*",
                    "infrastructure*",
                    "sqlalchemy*",
                )
                .check(context)
            )


class TestApplicationLayerBoundaries:
    """Tests that application services depend only on ports."""

    def test_application_does_not_import_infrastructure(self):
        """Services receive repositories and transactions through ports.

        The storage backend is chosen per request, so services must not
        reach for a concrete adapter themselves.
        """
        for context in ("iam", "profiles"):
            (
                archrule(f"{context}_application_no_infrastructure")
                .match(f"{context}.application*")
                .should_not_import(
                    "iam.infrastructure*",
                    "profiles.infrastructure*",
                    "infrastructure.database*",
                    "sqlalchemy*",
                )
                .check(context)
            )


class TestInfrastructureLayerBoundaries:
    """Tests that repository adapters do not reach up into services."""

    def test_infrastructure_does_not_import_application(self):
        for context in ("iam", "profiles"):
            (
                archrule(f"{context}_infrastructure_no_application")
                .match(f"{context}.infrastructure*")
                .should_not_import(
                    f"{context}.application*", f"{context}.presentation*"
                )
                .check(context)
            )


class TestBoundedContextIsolation:
    """Tests that IAM does not depend on the Profiles context.

    Profiles builds on IAM users; the reverse dependency would make the
    identity model aware of links and social links.
    """

    def test_iam_does_not_import_profiles(self):
        (
            archrule("iam_no_profiles")
            .match("iam*")
            .should_not_import("profiles*")
            .check("iam")
        )

    def test_shared_kernel_does_not_import_bounded_contexts(self):
        (
            archrule("shared_kernel_no_contexts")
            .match("shared_kernel*")
            .should_not_import("iam*", "profiles*")
            .check("shared_kernel")
        )
