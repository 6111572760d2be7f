"""
Thresholdless Pollutant Benchmark Matcher - Source Package

Main modules:
- loading: Reading and normalizing the five input tables
- normalization: CAS number and cell text normalization
- matching: CAS and synonym matching stages and the engine that runs them
- reporting: Writing match tables, review workbooks, and synonym-service name lists
- utils: YAML-backed configuration
"""

__version__ = "1.0.0"
