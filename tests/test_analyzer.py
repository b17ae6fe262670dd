import json
import os

import pytest

from require_default.analyzer import Analyzer
from require_default.errors import ParseError, UnresolvableSpecifierError, ValidationError
from require_default.fs_scan import DirectorySeed, EntrySeed
from require_default.model import CallerRef, Options


ABC = {
	"a.js": "module.exports = 1;\n",
	"b.js": "export default 2;\n",
	"c.js": "const b = require('./b');\n",
}


def suspicious(report):
	return {
		os.path.relpath(m.path, report.root): [(os.path.relpath(c.path, report.root), c.line, c.column) for c in m.callers]
		for m in report.suspicious
	}


def test_reports_default_export_required_without_default(project):
	root = project(ABC)
	analyzer = Analyzer(Options(root=root))
	report = analyzer.execute(DirectorySeed())

	assert report.analyzed_modules == 3
	assert suspicious(report) == {"b.js": [("c.js", 1, 11)]}
	assert analyzer.registry.get(os.path.join(root, "a.js")).has_default_export is False
	assert analyzer.registry.get(os.path.join(root, "a.js")).callers == []


def test_default_access_is_safe(project):
	root = project(dict(ABC, **{"c.js": "const b = require('./b').default;\n"}))
	analyzer = Analyzer(Options(root=root))
	report = analyzer.execute()
	assert report.suspicious == []
	assert analyzer.registry.get(os.path.join(root, "b.js")).callers == []


def test_two_file_cycle(project):
	root = project(
		{
			"x.js": "const y = require('./y');\nexport default 1;\n",
			"y.js": "const x = require('./x');\nexport default 2;\n",
		}
	)
	for seed in (DirectorySeed(), EntrySeed(["x.js"])):
		report = Analyzer(Options(root=root)).execute(seed)
		assert report.analyzed_modules == 2
		assert suspicious(report) == {"x.js": [("y.js", 1, 11)], "y.js": [("x.js", 1, 11)]}


def test_module_requiring_itself(project):
	root = project({"self.js": "const me = require('./self');\nexport default 1;\n"})
	report = Analyzer(Options(root=root)).execute(EntrySeed("self.js"))
	assert suspicious(report) == {"self.js": [("self.js", 1, 12)]}


def test_entries_follow_imports(project):
	root = project(
		{
			"main.js": "import c from './c';\n",
			"c.js": "const b = require('./b');\nexport default b;\n",
			"b.js": "export default 2;\n",
			"unreachable.js": "const b = require('./b');\n",
		}
	)
	report = Analyzer(Options(root=root)).execute(EntrySeed(["main.js"]))
	assert report.analyzed_modules == 3
	assert suspicious(report) == {"b.js": [("c.js", 1, 11)]}


def test_entries_follow_safe_requires_and_reexports(project):
	root = project(
		{
			"main.js": "const lib = require('./lib').default;\n",
			"lib.js": "export * from './inner';\nexport default 1;\n",
			"inner.js": "const d = require('./d');\n",
			"d.ts": "export default class D {}\n",
		}
	)
	report = Analyzer(Options(root=root)).execute(EntrySeed(["main.js"]))
	assert report.analyzed_modules == 4
	assert suspicious(report) == {"d.ts": [("inner.js", 1, 11)]}


def test_builtins_are_skipped(project):
	root = project({"main.js": "const fs = require('fs');\nconst path = require('node:path');\n"})
	analyzer = Analyzer(Options(root=root))
	report = analyzer.execute(EntrySeed(["main.js"]))
	assert report.analyzed_modules == 1
	assert len(analyzer.registry) == 1


def test_dependencies_are_not_analyzed(project):
	root = project(
		{
			"main.js": "const pkg = require('pkg');\n",
			"node_modules/pkg/package.json": json.dumps({"main": "index.js"}),
			"node_modules/pkg/index.js": "export default 1;\n",
		}
	)
	analyzer = Analyzer(Options(root=root))
	report = analyzer.execute(EntrySeed(["main.js"]))
	assert report.analyzed_modules == 1
	assert report.suspicious == []
	record = analyzer.registry.get(os.path.join(root, "node_modules", "pkg", "index.js"))
	assert record.callers == [CallerRef(path=os.path.join(root, "main.js"), line=1, column=13)]


def test_alias_and_typescript_target(project):
	root = project(
		{
			"src/utils/foo.ts": "export default function foo(): number { return 1; }\n",
			"src/app/main.js": "const foo = require('Utilities/foo');\n",
		}
	)
	report = Analyzer(Options(root=root, alias={"Utilities": "src/utils"})).execute()
	assert suspicious(report) == {
		os.path.join("src", "utils", "foo.ts"): [(os.path.join("src", "app", "main.js"), 1, 13)]
	}


def test_unresolvable_require_aborts(project):
	root = project({"main.js": "const gone = require('./missing');\n"})
	with pytest.raises(UnresolvableSpecifierError) as exc:
		Analyzer(Options(root=root)).execute()
	assert exc.value.specifier == "./missing"
	assert exc.value.referencing_file == os.path.join(root, "main.js")


def test_parse_error_aborts(project):
	root = project({"broken.js": "const = ;\n"})
	with pytest.raises(ParseError) as exc:
		Analyzer(Options(root=root)).execute()
	assert exc.value.path == os.path.join(root, "broken.js")


def test_missing_root(tmp_path):
	with pytest.raises(ValidationError):
		Analyzer(Options(root=str(tmp_path / "nope"))).execute()


def test_analyze_is_idempotent(project):
	root = project(ABC)
	analyzer = Analyzer(Options(root=root))
	c = os.path.join(root, "c.js")
	analyzer.analyze(c)
	analyzer.analyze(c)
	assert analyzer.visited == {c}
	assert len(analyzer.registry.get(os.path.join(root, "b.js")).callers) == 1


def test_caller_column_counts_characters(project):
	root = project(dict(ABC, **{"c.js": "const ñé = require('./b');\n"}))
	report = Analyzer(Options(root=root)).execute(DirectorySeed())
	assert suspicious(report) == {"b.js": [("c.js", 1, 12)]}


def test_entries_follow_dotted_extensionless_imports(project):
	root = project(
		{
			"main.js": "import svc from './user.service';\n",
			"other.js": "const s = require('./user.service');\n",
			"user.service.js": "export default 1;\n",
		}
	)
	report = Analyzer(Options(root=root)).execute(EntrySeed(["main.js", "other.js"]))
	assert report.analyzed_modules == 3
	assert suspicious(report) == {"user.service.js": [("other.js", 1, 11)]}
