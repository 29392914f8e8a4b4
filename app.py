from __future__ import annotations
import logging
from pathlib import Path
import streamlit as st
from notas.pipeline import parse_notas_files
from notas.ingest import load_uploads_from_paths
from notas.summary import (students_frame, courses_frame, filter_students, level_options, teacher_options,
                           compute_kpis, level_breakdown, courses_at_risk, ALL)
from notas.export import export_students_to_excel_bytes, export_file_name

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

st.set_page_config(page_title="Dashboard de notas", layout="wide")
st.title("Dashboard de notas por curso")

RESULT_OPTIONS = [ALL, "APROBADO", "APLAZADO", "OTRO"]
# =========================

# Uploads
# =========================
uploads = list(st.file_uploader(
    "Cargue los archivos de notas (.xlsx / .xls, puede ser varios)",
    type=["xlsx", "xls"],
    accept_multiple_files=True
) or [])

# папка на машине, где запущен Streamlit (все .xlsx/.xls внутри, рекурсивно)
folder = st.sidebar.text_input("Carpeta local con archivos de notas (opcional)", value="").strip()
if folder:
    if Path(folder).is_dir():
        uploads.extend(load_uploads_from_paths([folder]))
    else:
        st.sidebar.error(f'No existe la carpeta "{folder}".')

if not uploads:
    st.info("Cargue uno o más archivos (o indique una carpeta) para empezar.")
    st.stop()

with st.spinner("Procesando archivos..."):
    res = parse_notas_files(uploads)

courses = res["courses"]
students = res["students"]

st.caption(f"Archivos: {res['files_count']} | Cursos: {len(courses)} | Estudiantes: {len(students)}")

if res["warnings"]:
    with st.expander(f"Advertencias ({len(res['warnings'])})", expanded=True):
        for w in res["warnings"]:
            st.warning(w)

if not students:
    st.error("No se encontraron estudiantes en los archivos cargados.")
    st.stop()
# =========================

# KPI
# =========================
kpis = compute_kpis(students, courses)
k1, k2, k3, k4, k5, k6 = st.columns(6)
k1.metric("Estudiantes", kpis["total"])
k2.metric("Aprobados", kpis["aprobados"])
k3.metric("Aplazados", kpis["aplazados"])
k4.metric("Tasa de aprobación", f"{kpis['tasa_aprob']}%")
k5.metric("Promedio", "-" if kpis["promedio"] is None else kpis["promedio"])
k6.metric("Cursos en riesgo / alerta", f"{kpis['cursos_riesgo']} / {kpis['cursos_alerta']}")

c1, c2 = st.columns(2)
with c1:
    st.subheader("Resultados por nivel")
    chart = level_breakdown(students)
    st.bar_chart(chart.set_index("level")[["aprobados", "aplazados"]])
with c2:
    st.subheader("Cursos en alerta / riesgo")
    flagged = courses_at_risk(courses)
    if flagged:
        st.dataframe(courses_frame(flagged), width="stretch")
    else:
        st.success("Ningún curso en alerta o riesgo.")

with st.expander("Todos los cursos", expanded=False):
    st.dataframe(courses_frame(courses), width="stretch")
# =========================

# Estudiantes
# =========================
st.subheader("Estudiantes")
f1, f2, f3, f4 = st.columns(4)
with f1:
    q = st.text_input("Buscar (nombre, apellido, cédula, curso)", value="")
with f2:
    lsel = st.selectbox("Nivel", level_options(students), index=0)
with f3:
    tsel = st.selectbox("Profesor", teacher_options(students), index=0)
with f4:
    rsel = st.selectbox("Resultado", RESULT_OPTIONS, index=0)

view = filter_students(students, query=q, level=lsel, teacher=tsel, result=rsel)
st.caption(f"Mostrando {len(view)} de {len(students)}")
st.dataframe(students_frame(view), width="stretch")

if view:
    st.download_button(
        "Exportar a Excel",
        data=export_students_to_excel_bytes(view),
        file_name=export_file_name(),
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
