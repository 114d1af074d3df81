"""Project types and their static .gitignore templates."""

from __future__ import annotations

import enum
import types


class ProjectType(str, enum.Enum):
    NODE = "node"
    REACT = "react"
    VUE = "vue"
    ANGULAR = "angular"
    PYTHON = "python"
    JAVA = "java"
    CSHARP = "csharp"
    GO = "go"
    RUST = "rust"
    PHP = "php"
    RUBY = "ruby"
    FLUTTER = "flutter"
    UNITY = "unity"

    def __str__(self) -> str:
        return self.value


DESCRIPTIONS: dict[ProjectType, str] = {
    ProjectType.NODE: "Node.js/JavaScript projects",
    ProjectType.REACT: "React applications",
    ProjectType.VUE: "Vue.js applications",
    ProjectType.ANGULAR: "Angular applications",
    ProjectType.PYTHON: "Python projects",
    ProjectType.JAVA: "Java/Maven/Gradle projects",
    ProjectType.CSHARP: "C#/.NET projects",
    ProjectType.GO: "Go projects",
    ProjectType.RUST: "Rust projects",
    ProjectType.PHP: "PHP projects",
    ProjectType.RUBY: "Ruby projects",
    ProjectType.FLUTTER: "Flutter/Dart projects",
    ProjectType.UNITY: "Unity game engine projects",
}

_NPM_LOGS = (
    "node_modules/",
    "npm-debug.log*",
    "yarn-debug.log*",
    "yarn-error.log*",
    ".npm",
    ".yarn-integrity",
    ".pnpm-debug.log*",
)

_TEMPLATES: dict[ProjectType, tuple[str, ...]] = {
    ProjectType.NODE: _NPM_LOGS + ("dist/", "build/", "coverage/"),
    ProjectType.PYTHON: (
        "__pycache__/", "*.py[cod]", "*$py.class", "*.so", ".Python",
        "build/", "develop-eggs/", "dist/", "downloads/", "eggs/", ".eggs/",
        "lib/", "lib64/", "parts/", "sdist/", "var/", "wheels/", "*.egg-info/",
        ".installed.cfg", "*.egg", ".env", ".venv", "env/", "venv/", "ENV/",
        "env.bak/", "venv.bak/", ".pytest_cache/", ".coverage", "htmlcov/",
        ".tox/", ".cache", ".mypy_cache/", ".dmypy.json", "dmypy.json",
    ),
    ProjectType.JAVA: (
        "*.class", "*.jar", "*.war", "*.ear", "*.zip", "*.tar.gz", "*.rar",
        "target/", "build/", ".gradle/", "gradle-app.setting",
        "!gradle-wrapper.jar", ".gradletasknamecache", ".settings/",
        ".project", ".classpath", "bin/", "tmp/", "*.tmp", "*.bak", "*.swp",
        "*~.nib", "local.properties", ".loadpath", ".factorypath",
    ),
    ProjectType.CSHARP: (
        "bin/", "obj/", "*.user", "*.suo", "*.cache", "*.pdb", "*.exe",
        "*.dll", "*.manifest", "*.application", "*.clickonce", "packages/",
        ".vs/", "*.log", "*.vspscc", "*.vssscc", ".builds", "*.pidb",
        "*.svclog", "*.scc",
    ),
    ProjectType.GO: (
        "*.exe", "*.exe~", "*.dll", "*.so", "*.dylib", "*.test", "*.out",
        "go.work", "vendor/", ".vscode/", ".idea/",
    ),
    ProjectType.RUST: ("target/", "Cargo.lock", "*.rs.bk", "*.pdb"),
    ProjectType.PHP: (
        "vendor/", "composer.phar", ".env", ".env.local", ".env.*.local",
        "*.log", "/storage/logs/", "/bootstrap/cache/", ".phpunit.result.cache",
    ),
    ProjectType.RUBY: (
        "*.gem", "*.rbc", "/.config", ".yardoc/", "_yardoc/", "doc/", "rdoc/",
        ".bundle/", "vendor/bundle/", "lib/bundler/man/", "tmp/",
        ".sass-cache/", ".rvmrc", "Gemfile.lock",
    ),
    ProjectType.REACT: _NPM_LOGS + (
        "build/", "dist/", ".env", ".env.local", ".env.development.local",
        ".env.test.local", ".env.production.local", "coverage/",
    ),
    ProjectType.VUE: _NPM_LOGS + (
        "dist/", "coverage/", ".env", ".env.local", ".env.*.local",
    ),
    ProjectType.ANGULAR: _NPM_LOGS + (
        "dist/", "coverage/", ".angular/", ".env", ".env.local", ".env.*.local",
    ),
    ProjectType.FLUTTER: (
        "*.iml", "*.ipr", "*.iws", ".idea/", ".gradle/", "local.properties",
        ".pub-cache/", ".pub/", "build/", ".flutter-plugins",
        ".flutter-plugins-dependencies", ".packages", "ios/.symlinks/", ".fvm/",
    ),
    ProjectType.UNITY: (
        "Library/", "Temp/", "Obj/", "Build/", "Builds/", "Logs/",
        "UserSettings/", ".vsconfig", "*.tmp", "*.user", "*.userprefs",
        "*.pidb", "*.booproj", "*.svd", "*.pdb", "*.mdb", "*.opendb",
        "*.VC.db", "sysinfo.txt", "*.stackdump",
    ),
}

TEMPLATE_CATALOG: types.MappingProxyType[ProjectType, tuple[str, ...]] = types.MappingProxyType(_TEMPLATES)


def parse_project_type(name: str | ProjectType) -> ProjectType | None:
    """Map an identifier to a ``ProjectType``; exact match only."""
    if isinstance(name, ProjectType):
        return name
    try:
        return ProjectType(name.strip())
    except ValueError:
        return None


def resolve_template(name: str | ProjectType) -> tuple[str, ...] | None:
    """Return the template entries for *name*, or ``None`` if it is unknown."""
    project_type = parse_project_type(name)
    if project_type is None:
        return None
    return TEMPLATE_CATALOG[project_type]


def describe_project_types() -> list[str]:
    width = max(len(t.value) for t in ProjectType)
    return [f"{t.value:<{width}} - {DESCRIPTIONS[t]}" for t in ProjectType]
