# rrrgradle

An experimental build tool for Java projects. It reads a project description
from `rrrgradle.toml` and then:

- downloads dependencies from Maven Central, following their transitive
  dependencies, into `.rrrgradle/cache`;
- compiles sources incrementally with `javac`;
- runs the application, or its JUnit tests, with `java`;
- packages the compiled classes into a JAR with `jar`.

A JDK (`javac`, `java`, `jar`) has to be on your `PATH`.

## Installation

```
pip install .
```

## Commands

All commands are run from the project's root directory.

```
rrrgradle init            # write rrrgradle.toml and a sample main and test class
rrrgradle fetch           # download dependencies into .rrrgradle/cache
rrrgradle build           # compile main and test sources into build/
rrrgradle run             # run the configured main class
rrrgradle test            # run the JUnit tests found in the test output
rrrgradle package         # build <name>-<version>.jar
rrrgradle package --uber  # also copy dependency JARs into lib/ and list them in the manifest
rrrgradle clean           # remove the build/ directory
```

`run` and `test` exit with status 1 when the application or a test fails.
`package` builds the project first and reports on stderr if the build or the
`jar` tool fails.

## Configuration

`rrrgradle init` writes this starting point:

```toml
[project]
name = "MyJavaApp"
version = "0.1.0"
main_class = "com.example.Main"

[main]
java = ["src/main/java"]
resources = ["src/main/resources"]
output = "build/classes/java/main"

[test]
java = ["src/test/java"]
resources = ["src/test/resources"]
output = "build/classes/java/test"

[dependencies]
# Main dependencies go here
# example: "org.slf4j:slf4j-api" = "2.0.9"

[test_dependencies]
"junit:junit" = "4.13.2"
"org.hamcrest:hamcrest-core" = "1.3"
```

When `[main]` or `[test]` is left out, the conventional `src/main/...` and
`src/test/...` layouts shown above are used.

Dependencies are written as `"group:artifact" = "version"`. Their POM files are
read to follow transitive dependencies, skipping those with `test` scope and
those marked optional. Files already in the cache are not downloaded again.

Compilation is incremental: a `.java` file is recompiled only when its `.class`
file is missing or older. Resources are copied into the output directory when
compilation succeeds or nothing needed compiling.

Test classes are the compiled `.class` files in the test output whose path
contains `Test`; they are run with `org.junit.runner.JUnitCore`.

## Using it from Python

```python
from rrrgradle.config import load_config
from rrrgradle.build import build_project
from rrrgradle.pom import parse_pom_model

config = load_config("rrrgradle.toml")
if build_project(config, ".rrrgradle/cache"):
    print("built", config.project.name)

model = parse_pom_model(".rrrgradle/cache/junit-4.13.2.pom")
print([d.artifact_id for d in model.dependencies])
```

Other entry points: `rrrgradle.fetch.fetch_dependencies` and
`DependencyFetcher`, `rrrgradle.package.package_project` and `manifest_text`,
`rrrgradle.runner.run_project`, and `rrrgradle.junit_runner.test_project`.

## Limitations

- Only Maven Central is used as a repository.
- Versions are not reconciled: if two dependencies need different versions of
  the same artifact, both are downloaded.
- `${...}` placeholders in dependency coordinates are resolved only from the
  POM's own `<properties>`, not from parent POMs, which are not downloaded.
- There is no build scripting, no plug-ins and no test framework other than
  JUnit 4's command-line runner.