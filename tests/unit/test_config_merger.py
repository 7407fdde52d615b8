"""
Unit tests for ComputedFields and ConfigMerger.
"""

import pytest
from pydantic import ValidationError

from relay.builders.e2e import E2EOptions
from relay.core.exceptions import ConfigurationConflict, RelayConfigError
from relay.core.interfaces.pipeline import ComputedFields
from relay.services.pipeline.config_merger import ConfigMerger


class TestComputedFields:
    def test_set_and_get(self):
        computed = ComputedFields()
        computed.set("base_url", "http://localhost:4200", "dev-server")

        assert computed.get("base_url") == "http://localhost:4200"
        assert computed.origin("base_url") == "dev-server"
        assert "base_url" in computed
        assert len(computed) == 1

    def test_fields_can_only_be_set_once(self):
        computed = ComputedFields()
        computed.set("base_url", "http://a", "first")

        with pytest.raises(ConfigurationConflict) as exc_info:
            computed.set("base_url", "http://b", "second")

        assert exc_info.value.options == ("base_url",)
        assert computed.get("base_url") == "http://a"

    def test_as_dict_is_a_copy(self):
        computed = ComputedFields()
        computed.set("port", 1)

        snapshot = computed.as_dict()
        snapshot["port"] = 2

        assert computed.get("port") == 1


class TestConfigMerger:
    @pytest.fixture
    def options(self):
        return E2EOptions(protractor_config="protractor.conf.js", host="localhost")

    def test_no_computed_fields_returns_options_unchanged(self, options):
        assert ConfigMerger().merge(options, ComputedFields()) is options

    def test_computed_value_fills_unset_option(self, options):
        computed = ComputedFields()
        computed.set("base_url", "http://localhost:4300", "dev-server")

        merged = ConfigMerger().merge(options, computed)

        assert merged.base_url == "http://localhost:4300"
        assert merged.host == "localhost"

    def test_caller_options_are_not_mutated(self, options):
        computed = ComputedFields()
        computed.set("base_url", "http://localhost:4300", "dev-server")

        ConfigMerger().merge(options, computed)

        assert options.base_url is None

    def test_options_are_read_only(self, options):
        with pytest.raises(ValidationError):
            options.base_url = "http://elsewhere"

    def test_conflicting_caller_value_is_refused(self):
        options = E2EOptions(protractor_config="p.js", base_url="http://given")
        computed = ComputedFields()
        computed.set("base_url", "http://computed", "dev-server")

        with pytest.raises(ConfigurationConflict) as exc_info:
            ConfigMerger().merge(options, computed)

        assert exc_info.value.options == ("base_url",)

    def test_equal_caller_value_is_accepted(self):
        options = E2EOptions(protractor_config="p.js", base_url="http://same")
        computed = ComputedFields()
        computed.set("base_url", "http://same", "dev-server")

        merged = ConfigMerger().merge(options, computed)

        assert merged.base_url == "http://same"

    def test_unknown_computed_field_is_rejected(self, options):
        computed = ComputedFields()
        computed.set("not_an_option", 1, "somewhere")

        with pytest.raises(RelayConfigError):
            ConfigMerger().merge(options, computed)
