"""Choropleth dashboard for country-level social cost of carbon and carbon-flux impacts."""
