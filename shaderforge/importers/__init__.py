from shaderforge.importers.base import TextImporter
from shaderforge.importers.depfile import DepfileImporter
from shaderforge.importers.descriptor import DescriptorImporter

__all__ = ["TextImporter", "DepfileImporter", "DescriptorImporter"]
