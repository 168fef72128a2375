from movie_service.main import run


run()
