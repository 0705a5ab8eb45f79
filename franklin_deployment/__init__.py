"""Deployment tooling for the Franklin rollup contract suite."""
