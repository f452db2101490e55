from flask_wtf import FlaskForm
from wtforms import TextAreaField, SubmitField


class EditPageForm(FlaskForm):
    body = TextAreaField(
        "Body",
        render_kw={"rows": 20, "cols": 80},
    )
    submit = SubmitField(label="Save")
