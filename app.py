import gradio as gr
from campus_directory.admin.client import DirectoryClient
from campus_directory.admin.forms import AdminForms, STUDENT_TABLE_HEADERS
from campus_directory.config.settings import settings

forms = AdminForms(DirectoryClient(settings.ADMIN_API_URL, timeout=settings.ADMIN_API_TIMEOUT))


def refresh_departments():
    """Reload the department table and every department dropdown."""
    choices = forms.department_choices()
    return (
        forms.department_rows(),
        gr.update(choices=choices, value=None),
        gr.update(choices=choices, value=None),
    )


def add_department(name, code):
    status = forms.add_department(name, code)
    if status == "Department Added!":
        return (status, "", "") + refresh_departments()
    return (status, name, code) + refresh_departments()


def add_section(name, dept_id):
    status = forms.add_section(name, dept_id)
    cleared_name = "" if status == "Section Added!" else name
    return status, cleared_name, forms.section_rows()


def on_student_dept_change(dept_id):
    # Reset section when dept changes
    return gr.update(choices=forms.section_choices(dept_id), value=None)


def add_student(roll_no, name, father_name, email, phone, dept_id, sec_id, year, semester):
    status = forms.add_student(roll_no, name, father_name, email, phone, dept_id, sec_id, year, semester)
    rows = forms.student_rows(dept_id, sec_id)
    if status == "Student Added Successfully!":
        return (status, "", "", "", "", "", "", "", rows)
    return (status, roll_no, name, father_name, email, phone, year, semester, rows)


def delete_student(roll_no, dept_id, sec_id):
    status = forms.delete_student(roll_no)
    return status, forms.student_rows(dept_id, sec_id)


with gr.Blocks(title="Campus Directory Admin") as demo:
    gr.Markdown("# Campus Directory Admin")

    with gr.Tab("Departments"):
        with gr.Row():
            dept_name = gr.Textbox(label="Department Name")
            dept_code = gr.Textbox(label="Department Code")
        add_dept_button = gr.Button("Add Department")
        dept_status = gr.Textbox(label="Status", interactive=False)
        dept_table = gr.Dataframe(headers=["ID", "Name", "Code"], interactive=False)

    with gr.Tab("Sections"):
        with gr.Row():
            section_name = gr.Textbox(label="Section Name")
            section_dept = gr.Dropdown(label="Department", choices=[])
        add_section_button = gr.Button("Add Section")
        section_status = gr.Textbox(label="Status", interactive=False)
        section_table = gr.Dataframe(headers=["ID", "Name", "Department"], interactive=False)

    with gr.Tab("Students"):
        with gr.Row():
            student_dept = gr.Dropdown(label="Department", choices=[])
            student_section = gr.Dropdown(label="Section", choices=[])
        with gr.Row():
            roll_no = gr.Textbox(label="Roll No")
            student_name = gr.Textbox(label="Name")
            father_name = gr.Textbox(label="Father's Name")
        with gr.Row():
            email = gr.Textbox(label="Email")
            phone = gr.Textbox(label="Phone")
            year = gr.Textbox(label="Year")
            semester = gr.Textbox(label="Semester")
        with gr.Row():
            add_student_button = gr.Button("Add Student")
            delete_student_button = gr.Button("Delete Student by Roll No")
        student_status = gr.Textbox(label="Status", interactive=False)
        student_table = gr.Dataframe(headers=STUDENT_TABLE_HEADERS, interactive=False)

    demo.load(fn=refresh_departments, outputs=[dept_table, section_dept, student_dept])
    demo.load(fn=forms.section_rows, outputs=[section_table])

    add_dept_button.click(
        fn=add_department,
        inputs=[dept_name, dept_code],
        outputs=[dept_status, dept_name, dept_code, dept_table, section_dept, student_dept],
    )
    add_section_button.click(
        fn=add_section,
        inputs=[section_name, section_dept],
        outputs=[section_status, section_name, section_table],
    )
    student_dept.change(fn=on_student_dept_change, inputs=[student_dept], outputs=[student_section])
    student_section.change(fn=forms.student_rows, inputs=[student_dept, student_section], outputs=[student_table])
    add_student_button.click(
        fn=add_student,
        inputs=[roll_no, student_name, father_name, email, phone, student_dept, student_section, year, semester],
        outputs=[student_status, roll_no, student_name, father_name, email, phone, year, semester, student_table],
    )
    delete_student_button.click(
        fn=delete_student,
        inputs=[roll_no, student_dept, student_section],
        outputs=[student_status, student_table],
    )

if __name__ == "__main__":
    demo.launch()
