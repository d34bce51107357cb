"""Default build values, collected in one place.

The resolver is the only consumer; stages and variants read the resolved
``BuildConfig`` instead of these constants.
"""

from __future__ import annotations

DEFAULT_STEMCELL_NAME = "bosh-stemcell"
DEFAULT_INFRASTRUCTURE = "vsphere"
DEFAULT_ARCHITECTURE = "x86_64"

# Version constants of the bundled bosh agent. Not settable per run.
AGENT_VERSION = "0.7.0"
BOSH_PROTOCOL = "1"

AGENT_GEM_NAME = "_bosh_agent.gem"
AGENT_GEMSPEC = "bosh_agent.gemspec"

TEMPLATE_SUFFIX = ".tmpl"

IMAGE_FILE = "image"
MANIFEST_FILE = "stemcell.MF"
PACKAGE_LIST_FILE = "stemcell_dpkg_l.txt"


def default_agent_src_path(agent_version: str) -> str:
    """Conventional gem filename for a given agent version."""
    return f"./bosh_agent-{agent_version}.gem"


def default_target_name(variant_type: str, agent_version: str) -> str:
    return f"bosh-{variant_type}-{agent_version}.tgz"
