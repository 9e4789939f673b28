"""
MCP Server Instructions - usage guide for AI agents.
"""

from __future__ import annotations

SERVER_INSTRUCTIONS = """
ADS Search MCP Server - search the NASA Astrophysics Data System and keep a bibliography

## Setup
An ADS API token is required for every remote call. If a tool reports
"API token required", ask the user for their token and call set_api_token(token).
The token is validated before it is saved.

## Searching
search_papers(query) starts a new result list. ADS query syntax applies:
```
search_papers(query='author:"Huchra, John" year:1990-2000')
search_papers(query='title:"dark energy" property:refereed')
search_papers(query='bibcode:2019ApJ...882L..24A')
```
load_more_results() appends the next page. When has_more is false the
search is exhausted; calling load_more_results again returns an error.

## Paper details
get_paper_detail(bibcode) returns abstract, citation count, DOI and
affiliations. Details are cached; repeat calls are free.
get_references(bibcode) lists the papers a paper cites.

## Citations
format_citation(bibcode, style) with style:
- "inline": e.g. "Smith et al. (2021)", rendered locally
- "full": APS Journals reference string
- "bibtex": BibTeX record

## Bibliography
add_to_bibliography(bibcode) saves a paper (no duplicates).
list_bibliography() shows saved papers, newest first.
export_bibliography(format) renders all saved papers in one format;
list_export_formats() shows the available format keys.
clear_bibliography(confirm=True) removes everything - ask the user first.
"""
