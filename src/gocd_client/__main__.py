from gocd_client.cli.main import run

if __name__ == "__main__":
    run()
