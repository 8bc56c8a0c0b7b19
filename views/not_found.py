import streamlit as st


def view():
    st.header("404")
    st.write("This page does not exist.")
