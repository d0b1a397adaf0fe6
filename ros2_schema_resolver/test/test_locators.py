import logging

import pytest

from ros2_schema_resolver import (
    AmentPrefixLocator,
    BundleFormatError,
    BundleLocator,
    CentralSchemaResolver,
    ChainLocator,
    DictLocator,
    FormatVersionError,
    LocatorFailure,
    ResolverConfig,
    TypeReference,
    UnknownType,
)
from ros2_schema_resolver.file_io import check_bundle_version, dump_bundle, join_sections, split_sections


TIME = TypeReference("builtin_interfaces", "Time")


def test_ament_locator_indexes_share_dirs(tmp_path, write_msg_tree):
    prefix = write_msg_tree(tmp_path / "opt", {
        "builtin_interfaces": {"Time": "int32 sec\nuint32 nanosec\n"},
        "std_msgs": {"Header": "builtin_interfaces/Time stamp\nstring frame_id\n"},
    })
    (prefix / "share" / "std_msgs" / "msg" / "README.txt").write_text("ignored")
    (prefix / "share" / "no_msgs_here").mkdir()

    locator = AmentPrefixLocator([prefix])

    assert locator.available_types() == [TIME, TypeReference("std_msgs", "Header")]
    assert locator.resolve_source(TIME) == "int32 sec\nuint32 nanosec\n"
    with pytest.raises(UnknownType):
        locator.resolve_source(TypeReference("std_msgs", "String"))


def test_ament_overlay_shadows_underlay(tmp_path, write_msg_tree):
    overlay = write_msg_tree(tmp_path / "overlay", {"pkg": {"Thing": "int32 overlay"}})
    underlay = write_msg_tree(tmp_path / "underlay", {"pkg": {"Thing": "int32 underlay", "Other": "int8 x"}})

    locator = AmentPrefixLocator.from_env(f"{overlay}:{underlay}")

    assert locator.resolve_source(TypeReference("pkg", "Thing")) == "int32 overlay"
    assert locator.path_for(TypeReference("pkg", "Other")).parent.parent.parent.parent == underlay


def test_ament_from_env_requires_variable(monkeypatch):
    monkeypatch.delenv("AMENT_PREFIX_PATH", raising=False)
    with pytest.raises(LocatorFailure, match="AMENT_PREFIX_PATH is not set"):
        AmentPrefixLocator.from_env()


def test_ament_skips_invalid_file_names(tmp_path, write_msg_tree, caplog):
    prefix = write_msg_tree(tmp_path, {"pkg": {"lowercase": "int32 x", "Good": "int32 x"}})
    with caplog.at_level(logging.WARNING):
        locator = AmentPrefixLocator([prefix])
    assert locator.available_types() == [TypeReference("pkg", "Good")]
    assert "lowercase.msg" in caplog.text


def test_chain_locator_falls_through_on_unknown_only():
    first = DictLocator({"pkg/A": "int32 first"})
    second = DictLocator({"pkg/A": "int32 second", "pkg/B": "int32 b"})
    chain = ChainLocator([first, second])

    assert chain.resolve_source(TypeReference("pkg", "A")) == "int32 first"
    assert chain.resolve_source(TypeReference("pkg", "B")) == "int32 b"
    assert chain.available_types() == [TypeReference("pkg", "A"), TypeReference("pkg", "B")]
    with pytest.raises(UnknownType, match="searched 2 locator"):
        chain.resolve_source(TypeReference("pkg", "C"))


def test_bundle_file_round_trip(tmp_path, tf_definitions):
    bundle_path = tmp_path / "bundle.yaml"
    bundle_path.write_text(dump_bundle(tf_definitions), encoding="utf-8")

    locator = BundleLocator.from_file(bundle_path)
    resolver = CentralSchemaResolver(locator)

    assert resolver.raw_definitions() == tf_definitions
    assert resolver.flatten("tf2_msgs/TFMessage").types[-1] == TypeReference("tf2_msgs", "TFMessage")


def test_bundle_from_string_accepts_short_names():
    locator = BundleLocator.from_string(
        "ros2_schema_bundle_format: 0.1.0\n"
        "definitions:\n"
        "  builtin_interfaces/Time: |\n"
        "    int32 sec\n"
        "    uint32 nanosec\n"
    )
    assert locator.resolve_source(TIME) == "int32 sec\nuint32 nanosec\n"
    with pytest.raises(UnknownType, match="not in bundle"):
        locator.resolve_source(TypeReference("std_msgs", "Header"))


@pytest.mark.parametrize(
    "content, error",
    [
        ("definitions: {}\n", FormatVersionError),
        ("ros2_schema_bundle_format: 1.0.0\ndefinitions: {}\n", FormatVersionError),
        ("ros2_schema_bundle_format: 0.1.0\n", BundleFormatError),
        ("ros2_schema_bundle_format: 0.1.0\ndefinitions:\n  not-a-type: int32 x\n", BundleFormatError),
        ("ros2_schema_bundle_format: 0.1.0\ndefinitions:\n  pkg/A: 3\n", BundleFormatError),
        ("- just\n- a list\n", BundleFormatError),
        ("definitions: [unclosed\n", BundleFormatError),
    ],
)
def test_bundle_validation_errors(content, error):
    with pytest.raises(error):
        BundleLocator.from_string(content)


def test_bundle_newer_minor_warns(caplog):
    with caplog.at_level(logging.WARNING):
        locator = BundleLocator.from_string(
            "ros2_schema_bundle_format: 0.9.0\ndefinitions:\n  pkg/A: int32 x\n"
        )
    assert locator.available_types() == [TypeReference("pkg", "A")]
    assert "newer than the supported" in caplog.text


def test_bundle_missing_file(tmp_path):
    with pytest.raises(BundleFormatError, match="not found"):
        BundleLocator.from_file(tmp_path / "missing.yaml")


def test_bundle_version_check(caplog):
    assert check_bundle_version("0.1.0") == (0, 1, 0)
    assert check_bundle_version("v0.1.3") == (0, 1, 3)
    for bad in (None, "0.1", "1.0.0", "zero"):
        with pytest.raises(FormatVersionError):
            check_bundle_version(bad)
    assert not caplog.records

    with caplog.at_level(logging.WARNING):
        assert check_bundle_version("0.2.0", "extra.yaml") == (0, 2, 0)
    assert "extra.yaml" in caplog.text


def test_resolver_config_builds_chain(monkeypatch, tmp_path, write_msg_tree):
    bundle_path = tmp_path / "bundle.yaml"
    bundle_path.write_text(dump_bundle({"pkg/A": "int32 from_bundle"}), encoding="utf-8")
    prefix = write_msg_tree(tmp_path / "install", {"pkg": {"A": "int32 from_prefix", "B": "int32 b"}})
    monkeypatch.setenv("ROS2_SCHEMA_RESOLVER_BUNDLE", str(bundle_path))
    monkeypatch.setenv("AMENT_PREFIX_PATH", str(prefix))
    monkeypatch.setenv("ROS2_SCHEMA_RESOLVER_LOG_LEVEL", "debug")

    config = ResolverConfig.from_env()
    locator = config.build_locator()

    assert config.log_level == "debug"
    assert isinstance(locator, ChainLocator)
    assert locator.resolve_source(TypeReference("pkg", "A")) == "int32 from_bundle"
    assert locator.resolve_source(TypeReference("pkg", "B")) == "int32 b"


def test_resolver_config_without_sources():
    with pytest.raises(LocatorFailure, match="No definition source configured"):
        ResolverConfig().build_locator()


def test_set_logging_configures_package_logger():
    logger = ResolverConfig(log_level="DEBUG", print_level="WARNING").set_logging()
    try:
        assert logger.name == "ros2_schema_resolver"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2
        assert logger.propagate is False
    finally:
        logger.handlers.clear()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


def test_split_sections_rejects_headerless_text():
    text = join_sections([("pkg/A", "int32 x")])
    assert split_sections(text) == [("pkg/A", "int32 x")]
    with pytest.raises(Exception, match="header"):
        split_sections("int32 x")
