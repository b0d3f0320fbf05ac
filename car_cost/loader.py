"""
Data loader for car tables.
Reads a list of cars from a CSV file or an Excel workbook.
"""

import logging
from pathlib import Path
from typing import IO, Dict, List, Optional, Union

import pandas as pd

from .garage import Garage
from .models import Car

logger = logging.getLogger(__name__)

# Accepted header spellings, after strip + lower
COLUMN_ALIASES: Dict[str, List[str]] = {
    'name': ['name', 'car', 'make & model', 'make + model'],
    'buy_price': ['buy price', 'buy price (€)', 'buy_price', 'purchase price', 'price'],
    'liters_per_100km': ['liters/100km', 'liters per 100km', 'liters_per_100km',
                         'l/100km', 'consumption'],
    'fuel_type': ['fuel type', 'fuel_type', 'fuel'],
}
REQUIRED_COLUMNS = ('buy_price', 'liters_per_100km')


class CarLoader:
    """Load car rows from a spreadsheet."""

    def __init__(self, source: Union[str, Path, IO], suffix: Optional[str] = None,
                 sheet_name: Union[str, int] = 0):
        """
        Initialize loader.

        Args:
            source: Path to a .csv/.xlsx file, or an open file object
            suffix: File type for file objects ('.csv' or '.xlsx'); taken from
                the path otherwise
            sheet_name: Worksheet to read from Excel workbooks
        """
        if isinstance(source, (str, Path)):
            path = Path(source)
            if not path.exists():
                raise FileNotFoundError(f"Car table not found: {source}")
            suffix = suffix or path.suffix
            source = path
        self.source = source
        self.suffix = (suffix or '.csv').lower()
        self.sheet_name = sheet_name

        self.table = self._read()
        self._clean_column_names()

    def _read(self) -> pd.DataFrame:
        if self.suffix == '.csv':
            return pd.read_csv(self.source, dtype=str, keep_default_na=False)
        if self.suffix in ('.xlsx', '.xlsm'):
            return pd.read_excel(self.source, sheet_name=self.sheet_name,
                                 dtype=object, engine='openpyxl')
        raise ValueError(f"Unsupported car table format: {self.suffix}")

    def _clean_column_names(self):
        """Map whatever headers the file uses onto Car field names."""
        self.table.columns = self.table.columns.astype(str).str.strip().str.lower()
        renames = {}
        for field_name, aliases in COLUMN_ALIASES.items():
            for column in self.table.columns:
                if column in aliases and field_name not in renames.values():
                    renames[column] = field_name
        self.table = self.table.rename(columns=renames)

        missing = [c for c in REQUIRED_COLUMNS if c not in self.table.columns]
        if missing:
            raise ValueError(f"Car table is missing columns: {', '.join(missing)}")

    def cars(self) -> List[Car]:
        """Every row as a Car, with the usual coercion of blank or bad numbers."""
        result = []
        for row in self.table.to_dict(orient='records'):
            name = row.get('name', "")
            if name is None or pd.isna(name):
                name = ""
            fuel = row.get('fuel_type', "")
            if fuel is None or (not isinstance(fuel, str) and pd.isna(fuel)):
                fuel = ""
            result.append(Car.from_form(
                name=str(name).strip(),
                buy_price=row.get('buy_price'),
                liters_per_100km=row.get('liters_per_100km'),
                fuel_type=fuel,
            ))
        logger.info("Loaded %d cars from %s", len(result), self.source)
        return result

    def garage(self) -> Garage:
        """Loaded cars as a Garage; an empty table gives the single default row."""
        return Garage(tuple(self.cars()))
