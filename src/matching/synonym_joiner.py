"""
Synonym bridge construction.

Builds the relation connecting CEDEN pollutants to benchmarks through shared
PubChem synonyms. Each side's synonym list is pulled separately from the
PubChem Identifier Exchange Service, and PubChem does not guarantee that
synonym lists are closed under shared synonyms, so both lists are augmented
with the owner's own name and joined on synonym text.
"""

import logging
import warnings
from typing import Optional

import pandas as pd

from src.matching.types import BENCHMARK_NAME, CEDEN_NAME, PUBCHEM_SYNONYM

logger = logging.getLogger(__name__)

BRIDGE_COLUMNS = [CEDEN_NAME, PUBCHEM_SYNONYM, BENCHMARK_NAME]


class JoinAmbiguityWarning(UserWarning):
    """Issued when a many-to-many join yields more rows than either input."""

    pass


def check_join_growth(result: pd.DataFrame, left: pd.DataFrame, right: pd.DataFrame, label: str) -> bool:
    """
    Warn if a join produced more rows than both of its inputs.

    Args:
        result: Joined table
        left: Left input
        right: Right input
        label: Join description for the message

    Returns:
        True if a JoinAmbiguityWarning was issued
    """
    if len(result) <= max(len(left), len(right)):
        return False

    message = (
        f"{label}: many-to-many join produced {len(result)} rows "
        f"from {len(left)} x {len(right)} input rows"
    )
    logger.info(message)
    warnings.warn(message, JoinAmbiguityWarning, stacklevel=3)
    return True


class SynonymJoiner:
    """
    Builds the pollutant-to-benchmark synonym bridge.

    The reflexive-edge step is kept separate from the join so that each
    side's augmented edge set can be inspected and tested on its own.
    """

    def __init__(self, warn_on_growth: bool = True):
        """
        Initialize the synonym joiner.

        Args:
            warn_on_growth: Issue JoinAmbiguityWarning for many-to-many growth
        """
        self.warn_on_growth = warn_on_growth

    def add_identity_synonyms(self, edges: pd.DataFrame, owner_column: str) -> pd.DataFrame:
        """
        Add each owner's own name to its synonym list.

        Covers pollutants whose names equal a benchmark name (or one of its
        synonyms) without PubChem listing that name as a synonym.

        Args:
            edges: Synonym edges with ``owner_column`` and ``pubchem_synonym``
            owner_column: ``ceden_name`` or ``benchmark_name``

        Returns:
            Augmented edge table without missing synonyms or duplicate rows

        Examples:
            >>> edges = pd.DataFrame({'ceden_name': ['Diazinon'], 'pubchem_synonym': ['Basudin']})
            >>> SynonymJoiner().add_identity_synonyms(edges, 'ceden_name')['pubchem_synonym'].tolist()
            ['Basudin', 'Diazinon']
        """
        edges = edges[[owner_column, PUBCHEM_SYNONYM]]
        identities = edges.assign(**{PUBCHEM_SYNONYM: edges[owner_column]}).drop_duplicates()

        augmented = pd.concat([edges, identities], ignore_index=True)
        augmented = augmented[augmented[PUBCHEM_SYNONYM].notna()].drop_duplicates()

        logger.debug(
            f"{owner_column} synonyms: {len(edges)} edges + {len(identities)} identities "
            f"-> {len(augmented)} distinct edges"
        )
        return augmented.reset_index(drop=True)

    def join_edges(self, pollutant_edges: pd.DataFrame, benchmark_edges: pd.DataFrame) -> pd.DataFrame:
        """
        Inner-join two augmented edge tables on synonym text.

        Args:
            pollutant_edges: Augmented (ceden_name, pubchem_synonym) edges
            benchmark_edges: Augmented (benchmark_name, pubchem_synonym) edges

        Returns:
            Bridge table with columns (ceden_name, pubchem_synonym, benchmark_name)
        """
        bridge = pollutant_edges.merge(benchmark_edges, on=PUBCHEM_SYNONYM, how='inner')
        bridge = bridge[BRIDGE_COLUMNS].reset_index(drop=True)

        if self.warn_on_growth:
            check_join_growth(bridge, pollutant_edges, benchmark_edges, "Synonym bridge")

        return bridge

    def build_bridge(
        self,
        pollutant_synonyms: pd.DataFrame,
        benchmark_synonyms: pd.DataFrame,
    ) -> pd.DataFrame:
        """
        Build the synonym bridge from raw pollutant and benchmark synonym tables.

        Args:
            pollutant_synonyms: (ceden_name, pubchem_synonym) edges as loaded
            benchmark_synonyms: (benchmark_name, pubchem_synonym) edges as loaded

        Returns:
            One row per (pollutant, shared synonym, benchmark) triple
        """
        pollutant_edges = self.add_identity_synonyms(pollutant_synonyms, CEDEN_NAME)
        benchmark_edges = self.add_identity_synonyms(benchmark_synonyms, BENCHMARK_NAME)
        bridge = self.join_edges(pollutant_edges, benchmark_edges)

        logger.info(
            f"Synonym bridge: {len(bridge)} rows linking "
            f"{bridge[CEDEN_NAME].nunique()} pollutants to {bridge[BENCHMARK_NAME].nunique()} benchmarks"
        )
        return bridge


def build_synonym_bridge(
    pollutant_synonyms: pd.DataFrame,
    benchmark_synonyms: pd.DataFrame,
    joiner: Optional[SynonymJoiner] = None,
) -> pd.DataFrame:
    """Convenience wrapper around SynonymJoiner.build_bridge."""
    return (joiner or SynonymJoiner()).build_bridge(pollutant_synonyms, benchmark_synonyms)
