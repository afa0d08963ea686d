"""
Kitchen OS services.

- costing: recipe cost and margin arithmetic
- recipe_numbers: RCP-<year>-<seq> generation
- recipe_form: stored recipe -> editable form mapping
- domain: per-entity business services
- exports: PDF and XLSX report generation
"""
