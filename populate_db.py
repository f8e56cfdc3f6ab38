# populate_db.py — semaines + sketches de démonstration (écrase les fichiers JSON)
from app import create_app
from extensions import records
from models import Folder, Sketch

app = create_app()

with app.app_context():
    store = records.store

    # --- Création des dossiers ---
    folders = [
        Folder(id="week1", name="Week 1 - Introduction"),
        Folder(id="week2", name="Week 2 - Abstraction"),
        Folder(id="week3", name="Week 3 - Computational Thinking", is_default=True),
    ]
    store.write_folders(folders)

    # --- Création des sketches ---
    sketches = [
        Sketch(
            author="Elif Erpulat",
            title="Frog",
            description="Week 1 abstraction assignment in p5.js",
            url="https://openprocessing.org/sketch/2376645",
            width=600, height=600, week="week2",
        ),
        Sketch(
            author="Ada Tıngaz",
            title="Checkered Paprika",
            description="",
            url="https://editor.p5js.org/ada.tingaz/sketches/I2N_Nwb6W",
            width=1080, height=1080, week="week2",
        ),
        Sketch(
            author="Aslı Özcan",
            title="Turtle",
            description="",
            url="https://editor.p5js.org/asli.ozcan/full/ufM-LQ5Bj",
            width=1080, height=1080, week="week2",
        ),
    ]
    store.write_sketches(sketches)

    print("✅ Dossiers et sketches de test créés !")
    for s in store.read_sketches():
        print(f"  - {s.slug}  {s.week}")
