"""Streamlit front-end for PatientBMI."""
