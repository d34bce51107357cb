"""stemforge: build BOSH stemcells by driving veewee and vagrant.

Pipeline: setup (definition templates + agent gem) -> build_vm (veewee
build, vagrant export) -> package_stemcell (image + stemcell.MF + package
list -> .tgz). Distribution variants (ubuntu, redhat, centos, centosmicro)
hook into the stages without reordering them.
"""

__version__ = "0.1.0"

from stemforge.core.builder import StemcellBuilder
from stemforge.models.variants import VariantKind

__all__ = ["StemcellBuilder", "VariantKind", "__version__"]
