from gitlab_link.cli import main

main()
