# dev_hotreload.py
from livereload import Server
from wsgi import app  # app = create_app() déjà fait dans wsgi.py

server = Server(app.wsgi_app)
# Watch le code et les fichiers de données (l'instantané change à chaque mutation)
server.watch('*.py')
server.watch('api/*.py')
server.watch(app.config["SKETCHES_PATH"])
server.watch(app.config["FOLDERS_PATH"])

# Lance sur 5001 avec debug
server.serve(host='127.0.0.1', port=5001, debug=True)
