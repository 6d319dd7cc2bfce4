# -*- coding: utf-8 -*-
"""Manages vector data I/O, supporting formats like Shapefile, GeoJSON and GeoPackage.

Containers holding several layers (GeoPackage) must be asked for their layers first: reading one without naming a
layer raises LayerSelectionError listing them.
"""

import logging
import os

import geopandas as gpd
from pyogrio.errors import DataSourceError

from ..config import VECTOR_DRIVERS
from ..core.exceptions import LayerSelectionError, ResourceReadError
from ..core.table import FeatureTable

log = logging.getLogger(__name__)


class VectorIO:
    """Reads and writes feature tables through geopandas."""

    def __init__(self, engine=None):
        """Initialize the vector I/O service.

        Parameters:
        -----------
        engine : str, optional
            geopandas I/O engine ("pyogrio" or "fiona"); geopandas' default when None
        """
        self.engine = engine

    def list_layers(self, path):
        """List the layer names of a vector file.

        Parameters:
        -----------
        path : str
            Path to the vector file

        Returns:
        --------
        layers : list of str
            Layer names in file order
        """
        try:
            layers = gpd.list_layers(path)
        except (DataSourceError, OSError) as exc:
            raise ResourceReadError(f"Cannot list layers of '{path}': {exc}") from exc
        return layers["name"].tolist()

    def read(self, path, layer=None, name=None):
        """Read a vector file into a FeatureTable.

        Parameters:
        -----------
        path : str
            Path to the vector file
        layer : str, optional
            Layer to read; required when the file holds several layers
        name : str, optional
            Name of the table. Defaults to the layer name, then to the file name without extension.

        Returns:
        --------
        table : FeatureTable
            Features of the layer
        """
        if layer is None:
            layers = self.list_layers(path)
            if len(layers) > 1:
                raise LayerSelectionError(path, layers)

        kwargs = {"layer": layer} if layer is not None else {}
        if self.engine:
            kwargs["engine"] = self.engine

        try:
            gdf = gpd.read_file(path, **kwargs)
        except (DataSourceError, OSError) as exc:
            raise ResourceReadError(f"Cannot read '{path}': {exc}") from exc

        if name is None:
            name = layer if layer is not None else os.path.splitext(os.path.basename(str(path)))[0]
        log.info("Read %d features from %s", len(gdf), path)
        return FeatureTable(gdf, name=name)

    def write(self, table, output_path, driver=None, layer=None):
        """Write a FeatureTable to a vector file.

        Parameters:
        -----------
        table : FeatureTable
            Table to write
        output_path : str
            Path to the output vector file
        driver : str, optional
            OGR driver name. Inferred from the file extension when None.
        layer : str, optional
            Layer name inside multi-layer containers

        Returns:
        --------
        output_path : str
            Path written to
        """
        if driver is None:
            file_extension = os.path.splitext(str(output_path))[1].lower()
            if file_extension not in VECTOR_DRIVERS:
                raise ValueError(f"Unsupported vector format: {file_extension}")
            driver = VECTOR_DRIVERS[file_extension]

        directory = os.path.dirname(str(output_path))
        if directory:
            os.makedirs(directory, exist_ok=True)

        kwargs = {"layer": layer} if layer is not None else {}
        if self.engine:
            kwargs["engine"] = self.engine

        table.to_geodataframe().to_file(output_path, driver=driver, **kwargs)
        log.info("Wrote %d features to %s (%s)", len(table), output_path, driver)
        return output_path
