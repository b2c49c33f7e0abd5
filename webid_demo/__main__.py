"""python -m webid_demo"""
from webid_demo.main import cli

cli()
