from todostore.cli import cli

def main():
    """Main entry point for todostore."""
    cli()

if __name__ == '__main__':
    main()
