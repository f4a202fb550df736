from graphql_prepare.config import (
    BINDING_OUTPUT_KEYS,
    BUNDLE_OUTPUT_KEYS,
    GENERATOR_KEYS,
    ExtensionKey,
    PrepareArguments,
)


class TestExtensionKey:
    def test_get_nested_value(self):
        key = ExtensionKey("prepare-binding.output")
        extensions = {"prepare-binding": {"output": "out/app.ts"}}
        assert key.get(extensions) == "out/app.ts"
        assert key.is_set(extensions)

    def test_get_missing_value(self):
        key = ExtensionKey("prepare-binding.output")
        assert key.get({}) is None
        assert key.get(None) is None
        assert key.get({"prepare-binding": "not-a-dict"}) is None
        assert not key.is_set({"prepare-binding": {}})

    def test_deprecated(self):
        assert not ExtensionKey("prepare-bundle").deprecated
        assert ExtensionKey("bundle", replaced_by="prepare-bundle").deprecated

    def test_current_keys_come_first(self):
        for candidates in (BUNDLE_OUTPUT_KEYS, BINDING_OUTPUT_KEYS, GENERATOR_KEYS):
            assert not candidates[0].deprecated
            assert all(key.deprecated for key in candidates[1:])


class TestPrepareArguments:
    def test_defaults_run_both_steps(self):
        args = PrepareArguments().with_default_steps()
        assert args.bundle
        assert args.bindings

    def test_explicit_step_is_kept(self):
        args = PrepareArguments(bundle=True).with_default_steps()
        assert args.bundle
        assert not args.bindings

    def test_from_dict(self):
        args = PrepareArguments.from_dict({"projects": "app", "output": "out", "unknown": 1})
        assert args.projects == ("app",)
        assert args.output == "out"

    def test_from_dict_project_list(self):
        args = PrepareArguments.from_dict({"projects": ["a", "b"], "save": True})
        assert args.projects == ("a", "b")
        assert args.save

    def test_to_dict(self):
        args = PrepareArguments(projects=("a",), generator="binding-ts")
        d = args.to_dict()
        assert d["projects"] == ["a"]
        assert d["generator"] == "binding-ts"
        assert PrepareArguments.from_dict(d) == args
