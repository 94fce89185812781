"""Maven projects: pom.xml dependencies and jars from a local repository."""

from javaimports.environment.maven.dependencies import (
    MavenDependency,
    MavenDependencyFinder,
    find_dependencies,
)
from javaimports.environment.maven.environment import InitState, MavenEnvironment
from javaimports.environment.maven.loader import (
    DependencyScan,
    MavenDependencyLoader,
    MavenDependencyResolver,
    import_from_entry,
    load_dependency,
    scan_dependency,
)

__all__ = [
    "DependencyScan",
    "InitState",
    "MavenDependency",
    "MavenDependencyFinder",
    "MavenDependencyLoader",
    "MavenDependencyResolver",
    "MavenEnvironment",
    "find_dependencies",
    "import_from_entry",
    "load_dependency",
    "scan_dependency",
]
