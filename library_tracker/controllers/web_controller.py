from flask import Blueprint, render_template

web_bp = Blueprint("web", __name__)


@web_bp.get("/")
def index():
    # single page; all data comes from the JSON API
    return render_template("index.html")
